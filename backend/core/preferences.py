"""User Preferences

Two display toggles persisted as JSON in the platform config directory:
keyboard overlay visibility and practice mode (answers shown) vs test mode.
Every change rewrites the file. Unreadable files fall back to defaults.
"""
import json
import os
import sys
from pathlib import Path

from pydantic import BaseModel, ValidationError

from core.config import settings
from core.logging import content_logger

log = content_logger()

APP_DIR_NAME = "Haklada"
FILE_NAME = "preferences.json"


class UserPreferences(BaseModel):
    show_keyboard: bool = True
    practice_mode: bool = True  # False = test mode, answers hidden


def default_preferences_path() -> Path:
    """Platform-appropriate location of the preferences file."""
    if settings.PREFERENCES_PATH:
        return Path(settings.PREFERENCES_PATH)
    if sys.platform == "win32":
        base = Path(os.environ.get("LOCALAPPDATA", Path.home()))
        config_dir = base / APP_DIR_NAME
    elif sys.platform == "darwin":
        config_dir = Path.home() / "Library" / "Application Support" / APP_DIR_NAME
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
        config_dir = base / APP_DIR_NAME.lower()
    return config_dir / FILE_NAME


class PreferencesStore:
    """Loads preferences once and persists every change."""

    __slots__ = ("path", "_prefs")

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path else default_preferences_path()
        self._prefs = self.load()

    @property
    def current(self) -> UserPreferences:
        return self._prefs

    def load(self) -> UserPreferences:
        if not self.path.exists():
            return UserPreferences()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return UserPreferences.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            log.error("preferences_load_failed", path=str(self.path), error=str(e))
            return UserPreferences()

    def save(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(self._prefs.model_dump_json(indent=2), encoding="utf-8")
        except OSError as e:
            log.error("preferences_save_failed", path=str(self.path), error=str(e))

    def _update(self, **changes) -> UserPreferences:
        self._prefs = self._prefs.model_copy(update=changes)
        self.save()
        log.debug("preferences_updated", **changes)
        return self._prefs

    def toggle_keyboard(self) -> UserPreferences:
        return self._update(show_keyboard=not self._prefs.show_keyboard)

    def toggle_practice_mode(self) -> UserPreferences:
        return self._update(practice_mode=not self._prefs.practice_mode)

    def set_practice_mode(self, value: bool) -> UserPreferences:
        return self._update(practice_mode=value)
