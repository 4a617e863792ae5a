# npmrange/core/settings.py

"""
Settings management for the npmrange CLI.

This module handles reading and writing project settings stored in
.npmrange/settings.yaml
"""

from pathlib import Path
from typing import Any, Dict, Optional
import yaml

from npmrange.core.exceptions import SettingsError

SETTINGS_FILE = Path(".npmrange/settings.yaml")

INCLUDE_PRERELEASE_KEY = "include-prerelease"
MAX_STEPS_KEY = "max-steps"

# ==============================================================
# VALUE COERCION
# ==============================================================

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

def coerce_bool(key: str, value: Any) -> bool:
    """Accept YAML booleans and the usual textual spellings from env vars."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise SettingsError(key, value, "expected a boolean")

def coerce_positive_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise SettingsError(key, value, "expected a positive integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise SettingsError(key, value, "expected a positive integer")
    if number <= 0:
        raise SettingsError(key, value, "expected a positive integer")
    return number

# ==============================================================
# SETTINGS CLASS
# ==============================================================

class Settings:
    """Manages settings operations for a project."""

    def __init__(self, project_path: Path):
        self.project_path = Path(project_path)
        self.settings_file = self.project_path / SETTINGS_FILE
        self._data: Optional[Dict[str, Any]] = None

    def load(self) -> Dict[str, Any]:
        """Load settings data and cache it. A missing or unreadable file is empty."""
        if not self.settings_file.exists():
            self._data = {}
            return self._data

        try:
            content = self.settings_file.read_text(encoding="utf-8")
            data = yaml.safe_load(content)
            self._data = data if isinstance(data, dict) else {}
        except (OSError, yaml.YAMLError):
            self._data = {}
        return self._data

    def save(self) -> None:
        """Save cached data to settings file."""
        if self._data is None:
            return
        self.settings_file.parent.mkdir(parents=True, exist_ok=True)
        content = yaml.dump(self._data, default_flow_style=False, sort_keys=False)
        self.settings_file.write_text(content, encoding="utf-8")

    def save_if_changed(self, key: str, value: Any) -> None:
        """Save settings if key/value has changed."""
        data = self._loaded()
        if data.get(key) != value:
            data[key] = value
            self.save()

    def get(self, key: str, default: Any = None) -> Any:
        """Get a specific setting value."""
        return self._loaded().get(key, default)

    def get_settings(self) -> Dict[str, Any]:
        """Get all settings."""
        return self._loaded().copy()

    def _loaded(self) -> Dict[str, Any]:
        if self._data is None:
            self.load()
        return self._data  # type: ignore

    # ----------------------------------------------------------
    # Range options
    # ----------------------------------------------------------

    def get_include_prerelease(self) -> Optional[bool]:
        value = self.get(INCLUDE_PRERELEASE_KEY)
        return None if value is None else coerce_bool(INCLUDE_PRERELEASE_KEY, value)

    def set_include_prerelease(self, enabled: bool) -> None:
        self.save_if_changed(INCLUDE_PRERELEASE_KEY, bool(enabled))

    def get_max_steps(self) -> Optional[int]:
        value = self.get(MAX_STEPS_KEY)
        return None if value is None else coerce_positive_int(MAX_STEPS_KEY, value)

    def set_max_steps(self, max_steps: int) -> None:
        self.save_if_changed(MAX_STEPS_KEY, coerce_positive_int(MAX_STEPS_KEY, max_steps))
