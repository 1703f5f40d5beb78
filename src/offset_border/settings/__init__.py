"""
Module: settings

Purpose:
    Border stroke settings: value type, field-by-field validation,
    JSON persistence and the configuration UI message protocol.

Key Functions:
    - validate_settings(): Untrusted mapping -> BorderSettings

Key Classes:
    - BorderSettings, RGBColor, StrokeAlign
    - SettingsStore: JSON-backed persistence
    - ConfigSession: load/save/cancel message handling
"""

from .model import (
    BLACK,
    DEFAULT_SETTINGS,
    BorderSettings,
    RGBColor,
    StrokeAlign,
    validate_settings,
)
from .store import SETTINGS_KEY, SettingsStore
from .messages import ConfigOutcome, ConfigSession

__all__ = [
    # Model
    "BLACK",
    "DEFAULT_SETTINGS",
    "BorderSettings",
    "RGBColor",
    "StrokeAlign",
    "validate_settings",
    # Store
    "SETTINGS_KEY",
    "SettingsStore",
    # Messages
    "ConfigOutcome",
    "ConfigSession",
]
