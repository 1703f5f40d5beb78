"""
Settings persistence for border styling.

A JSON file holds a mapping of storage keys; the border settings live under
``offset-border.settings``. Any unreadable or malformed data results in a
graceful fallback to defaults for the current run, never a crash.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from PySide6.QtCore import QObject, Signal

from offset_border.errors import PersistenceUnavailableError

from .model import DEFAULT_SETTINGS, BorderSettings, validate_settings

logger = logging.getLogger(__name__)

SETTINGS_KEY = "offset-border.settings"


class SettingsStore(QObject):
    """Lightweight JSON-backed store for persisting border settings."""

    settingsChanged = Signal(dict)

    def __init__(self, path: Path) -> None:
        super().__init__()
        self.path = Path(path)
        self._current: BorderSettings = DEFAULT_SETTINGS
        self._last_error: Optional[str] = None

    @property
    def last_error(self) -> Optional[str]:
        """Message from the most recent failed read or write, if any."""
        return self._last_error

    @property
    def current(self) -> BorderSettings:
        """Settings in effect for this run (last loaded or saved)."""
        return self._current

    def load(self) -> BorderSettings:
        """Load settings, falling back to defaults on any storage failure.

        Returns DEFAULT_SETTINGS when nothing has been saved yet.
        """
        try:
            data = self._read()
        except PersistenceUnavailableError as e:
            self._last_error = str(e)
            logger.warning(f"Settings unavailable, using defaults: {e}")
            self._current = DEFAULT_SETTINGS
            return self._current

        self._last_error = None
        raw = data.get(SETTINGS_KEY)
        self._current = DEFAULT_SETTINGS if raw is None else validate_settings(raw)
        return self._current

    def save(self, settings: BorderSettings) -> bool:
        """Persist settings.

        The in-memory value is updated even when the write fails, so the
        rest of the run uses what the user chose.

        Returns:
            True if the settings reached disk.
        """
        self._current = settings
        payload = settings.to_dict()
        try:
            try:
                data = self._read()
            except PersistenceUnavailableError:
                data = {}
            data[SETTINGS_KEY] = payload
            self._write(data)
        except PersistenceUnavailableError as e:
            self._last_error = str(e)
            logger.warning(f"Failed to save settings: {e}")
            return False

        self._last_error = None
        self.settingsChanged.emit(payload)
        return True

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise PersistenceUnavailableError(f"Settings file is corrupted: {e}") from e
        except OSError as e:
            raise PersistenceUnavailableError(f"Failed to read settings: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceUnavailableError("Settings file does not contain a JSON object")
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        """Safely write settings with atomic replacement.

        Uses a temp file to prevent corruption if write is interrupted.
        """
        temp_path = self.path.with_suffix(".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            temp_path.replace(self.path)
        except OSError as e:
            try:
                if temp_path.exists():
                    temp_path.unlink()
            except OSError:
                pass
            raise PersistenceUnavailableError(f"Failed to write settings: {e}") from e
