"""
Module: settings.model

Purpose:
    The BorderSettings value type and the pure validate_settings() function
    that turns any persisted or UI-supplied mapping into a complete,
    valid settings object. Each field falls back to its own default, so
    one malformed field never discards the others.

Key Functions:
    - validate_settings(raw): Mapping -> BorderSettings (never raises)

Key Classes:
    - StrokeAlign: CENTER / INSIDE / OUTSIDE
    - RGBColor: Colour with channels in [0, 1]
    - BorderSettings: gap, stroke width, stroke colour, stroke alignment

Dependencies:
    - dataclasses (std), enum (std)

Used By:
    - settings.store: Loading and saving
    - settings.messages: Validating "save" messages
    - border.applier: Stroke styling
    - border.synthesizer: Gap
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_GAP = 8.0
DEFAULT_STROKE_WIDTH = 1.0


class StrokeAlign(str, Enum):
    """Where the outline is drawn relative to the shape's boundary."""

    CENTER = "CENTER"
    INSIDE = "INSIDE"
    OUTSIDE = "OUTSIDE"


@dataclass(frozen=True, slots=True)
class RGBColor:
    """
    Colour with float channels in [0, 1].

    Example:
        >>> RGBColor(1, 0, 0).to_rgb255()
        (255, 0, 0)
    """

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1]: {value}")

    def to_dict(self) -> dict[str, float]:
        return {"r": self.r, "g": self.g, "b": self.b}

    def to_rgb255(self) -> tuple[int, int, int]:
        """Channels scaled to 0-255 for raster drawing."""
        return (
            int(round(self.r * 255)),
            int(round(self.g * 255)),
            int(round(self.b * 255)),
        )


BLACK = RGBColor(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class BorderSettings:
    """
    Stroke settings for synthesized borders (immutable).

    Attributes:
        gap: Outward margin between node and border (>= 0)
        stroke_width: Border stroke weight (>= 0)
        stroke_color: Border stroke colour
        stroke_align: Stroke alignment; CENTER suits 1px outlines

    Example:
        >>> BorderSettings().to_dict()["strokeAlign"]
        'CENTER'
    """

    gap: float = DEFAULT_GAP
    stroke_width: float = DEFAULT_STROKE_WIDTH
    stroke_color: RGBColor = field(default_factory=lambda: BLACK)
    stroke_align: StrokeAlign = StrokeAlign.CENTER

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.gap < 0:
            raise ValueError(f"gap must be non-negative: {self.gap}")
        if self.stroke_width < 0:
            raise ValueError(f"stroke_width must be non-negative: {self.stroke_width}")

    def to_dict(self) -> dict[str, Any]:
        """Persisted / message form (camelCase keys)."""
        return {
            "gap": self.gap,
            "strokeWidth": self.stroke_width,
            "strokeColor": self.stroke_color.to_dict(),
            "strokeAlign": self.stroke_align.value,
        }


DEFAULT_SETTINGS = BorderSettings()


def validate_settings(raw: Optional[Mapping[str, Any]]) -> BorderSettings:
    """
    Build BorderSettings from an untrusted mapping.

    Missing or malformed fields fall back field-by-field to
    DEFAULT_SETTINGS. Never raises.

    Args:
        raw: Mapping with gap, strokeWidth, strokeColor, strokeAlign (or None)

    Returns:
        Fully resolved BorderSettings

    Example:
        >>> validate_settings({"gap": 12}).gap
        12.0
        >>> validate_settings({"strokeColor": "red"}).stroke_color
        RGBColor(r=0.0, g=0.0, b=0.0)
    """
    if not isinstance(raw, Mapping):
        if raw is not None:
            logger.debug(f"Ignoring non-mapping settings payload: {type(raw).__name__}")
        return DEFAULT_SETTINGS

    return BorderSettings(
        gap=_non_negative_number(raw.get("gap"), DEFAULT_SETTINGS.gap),
        stroke_width=_non_negative_number(raw.get("strokeWidth"), DEFAULT_SETTINGS.stroke_width),
        stroke_color=_parse_color(raw.get("strokeColor"), DEFAULT_SETTINGS.stroke_color),
        stroke_align=_parse_align(raw.get("strokeAlign"), DEFAULT_SETTINGS.stroke_align),
    )


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid measurement
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value == value


def _non_negative_number(value: Any, default: float) -> float:
    if _is_number(value) and value >= 0 and value != float("inf"):
        return float(value)
    return default


def _parse_color(value: Any, default: RGBColor) -> RGBColor:
    if not isinstance(value, Mapping):
        return default
    channels = [value.get(name) for name in ("r", "g", "b")]
    if not all(_is_number(c) and 0.0 <= c <= 1.0 for c in channels):
        return default
    return RGBColor(*(float(c) for c in channels))


def _parse_align(value: Any, default: StrokeAlign) -> StrokeAlign:
    if isinstance(value, StrokeAlign):
        return value
    if isinstance(value, str):
        try:
            return StrokeAlign(value.strip().upper())
        except ValueError:
            return default
    return default
