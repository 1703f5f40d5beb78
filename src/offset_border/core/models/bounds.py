"""
Module: bounds

Purpose:
    Provides the AxisAlignedBounds dataclass - the box a node occupies in
    absolute (document root) space once its transform has been applied.
    Bounds are derived, never stored on nodes; they are recomputed whenever
    geometry may have changed.

Key Functions:
    - AxisAlignedBounds.expanded(margin): Grow outward on all four sides
    - AxisAlignedBounds.union(other): Smallest box containing both
    - AxisAlignedBounds.to_dict() / from_dict(): JSON form

Dependencies:
    - dataclasses (std)

Used By:
    - core.geometry.bounds_calculator
    - border.synthesizer
    - pipeline.controller (selection anchor for page packing)
"""

from __future__ import annotations

from dataclasses import dataclass

from .transform import Point


@dataclass(frozen=True, slots=True)
class AxisAlignedBounds:
    """
    Axis-aligned rectangle in absolute space.

    Attributes:
        x: Left edge
        y: Top edge
        width: Horizontal extent (>= 0)
        height: Vertical extent (>= 0)

    Invariants:
        - width >= 0
        - height >= 0

    Example:
        >>> b = AxisAlignedBounds(0, 0, 100, 50)
        >>> b.expanded(10)
        AxisAlignedBounds(x=-10, y=-10, width=120, height=70)
    """

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        """Validate extents on construction."""
        if self.width < 0:
            raise ValueError(f"width must be >= 0: {self.width}")
        if self.height < 0:
            raise ValueError(f"height must be >= 0: {self.height}")

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def top_left(self) -> Point:
        return Point(self.x, self.y)

    # ─────────────────────────────────────────────────────────────────────────
    # Derivations
    # ─────────────────────────────────────────────────────────────────────────

    def expanded(self, margin: float) -> AxisAlignedBounds:
        """
        Grow the box by ``margin`` on every side.

        Args:
            margin: Outward offset; must not shrink the box below zero size

        Returns:
            New bounds moved up/left by margin and 2*margin larger
        """
        return AxisAlignedBounds(
            x=self.x - margin,
            y=self.y - margin,
            width=self.width + 2 * margin,
            height=self.height + 2 * margin,
        )

    def union(self, other: AxisAlignedBounds) -> AxisAlignedBounds:
        """Smallest box containing both boxes."""
        left = min(self.x, other.x)
        top = min(self.y, other.y)
        return AxisAlignedBounds(
            x=left,
            y=top,
            width=max(self.right, other.right) - left,
            height=max(self.bottom, other.bottom) - top,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict) -> AxisAlignedBounds:
        return cls(
            x=data["x"],
            y=data["y"],
            width=data["width"],
            height=data["height"],
        )
