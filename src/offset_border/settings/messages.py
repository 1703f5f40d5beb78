"""
Module: settings.messages

Purpose:
    Configuration message protocol between the core and a settings UI.
    On open the core posts {"type": "load", "settings": {...}}; the UI
    answers with {"type": "save", "settings": {...}} or {"type": "cancel"}.

Key Classes:
    - ConfigSession: Handles one configuration exchange
    - ConfigOutcome: What a handled message did

Dependencies:
    - settings.model: validate_settings
    - settings.store: SettingsStore

Used By:
    - pipeline.controller.open_config
    - cli (config command)
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional, Protocol

from .model import BorderSettings, validate_settings
from .store import SettingsStore

logger = logging.getLogger(__name__)

SAVED_MESSAGE = "Settings saved. Run “Add Offset Border”."


class ConfigHost(Protocol):
    """Host calls a config session needs."""

    def post_message(self, message: dict) -> None: ...

    def notify(self, message: str) -> None: ...

    def close(self) -> None: ...


class ConfigOutcome(str, Enum):
    SAVED = "saved"
    SAVE_FAILED = "save_failed"
    CANCELLED = "cancelled"
    IGNORED = "ignored"


class ConfigSession:
    """
    One open configuration UI.

    Example:
        >>> session = ConfigSession(store, document)
        >>> session.open()  # posts the load message
        >>> session.handle_message({"type": "save", "settings": {"gap": 4}})
        <ConfigOutcome.SAVED: 'saved'>
    """

    def __init__(self, store: SettingsStore, host: ConfigHost) -> None:
        self._store = store
        self._host = host
        self._settings: Optional[BorderSettings] = None
        self.closed = False

    @property
    def settings(self) -> BorderSettings:
        if self._settings is None:
            self._settings = self._store.load()
        return self._settings

    def load_message(self) -> dict:
        return {"type": "load", "settings": self.settings.to_dict()}

    def open(self) -> dict:
        """Push current settings to the UI and return the posted message."""
        message = self.load_message()
        self._host.post_message(message)
        return message

    def handle_message(self, message: Any) -> ConfigOutcome:
        """
        Handle one message from the UI.

        Args:
            message: Decoded UI message (anything; non-dicts are ignored)

        Returns:
            ConfigOutcome describing what happened
        """
        if self.closed or not isinstance(message, dict):
            return ConfigOutcome.IGNORED

        kind = message.get("type")
        if kind == "save":
            incoming = validate_settings(message.get("settings") or {})
            saved = self._store.save(incoming)
            self._settings = incoming
            if saved:
                self._host.notify(SAVED_MESSAGE)
            else:
                self._host.notify("Settings could not be saved; they apply to this run only.")
            self._close()
            return ConfigOutcome.SAVED if saved else ConfigOutcome.SAVE_FAILED

        if kind == "cancel":
            logger.info("Configuration cancelled")
            self._close()
            return ConfigOutcome.CANCELLED

        logger.debug(f"Ignoring config message of type {kind!r}")
        return ConfigOutcome.IGNORED

    def _close(self) -> None:
        self.closed = True
        self._host.close()
