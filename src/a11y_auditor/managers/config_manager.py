# src/a11y_auditor/managers/config_manager.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from a11y_auditor.model import AuditSettings
from a11y_auditor.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """
    A singleton class to manage the application's configuration.
    It loads the packaged settings.json (plus optional user overrides) and
    allows for in-memory modifications.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Loads the configuration from the file."""
        self._config: Dict[str, Any] = {}
        self.reset()
        logger.debug("ConfigManager initialized.")

    @staticmethod
    def _read_json(path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path} does not contain a JSON object")
        return data

    def get_all(self) -> Dict[str, Any]:
        """Returns the entire current configuration dictionary."""
        return self._config

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """
        Safely retrieves a nested value from the configuration.
        e.g., 'audit.image_alt_severity'.
        """
        keys = key_path.split('.')
        value = self._config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return default
        return value if value is not None else default

    def set_nested(self, key_path: str, value: Any) -> bool:
        """
        Sets a nested value in the in-memory configuration.
        e.g., 'debug.level', 'INFO'
        """
        keys = key_path.split('.')
        d = self._config
        # Navigate to the second-to-last dictionary
        for key in keys[:-1]:
            d = d.setdefault(key, {})
            if not isinstance(d, dict):
                logger.error("Cannot set value: '%s' is not a dictionary.", key)
                return False

        # Cast the new value to the type of the old one where possible
        original_value = d.get(keys[-1])
        if original_value is not None and not isinstance(original_value, (list, dict)):
            try:
                value = type(original_value)(value)
            except (ValueError, TypeError):
                logger.warning(
                    "Could not cast new value for '%s' to type %s. Storing as string.",
                    key_path, type(original_value).__name__
                )

        d[keys[-1]] = value
        logger.info("Configuration updated: %s = %s", key_path, value)
        return True

    def reset(self):
        """Resets the in-memory configuration from settings.json (and user overrides)."""
        try:
            config_path = PathUtils.get_settings_file()
            if not config_path.exists():
                logger.warning("settings.json not found at %s. Using empty config.", config_path)
                self._config = {}
            else:
                self._config = self._read_json(config_path)

            user_path = PathUtils.get_user_settings_file()
            if user_path.exists():
                self._config = _deep_merge(self._config, self._read_json(user_path))
                logger.info("User overrides applied from %s", user_path)

            logger.debug("Configuration has been (re)loaded from settings.json.")
        except Exception as e:
            logger.error("Failed to load settings.json: %s", e, exc_info=True)
            self._config = {}

    def save_user_setting(self, key_path: str) -> Path:
        """
        Writes the current in-memory value of key_path to the user settings
        file, keeping any other overrides already stored there.
        """
        user_path = PathUtils.get_user_settings_file()
        data = self._read_json(user_path) if user_path.exists() else {}

        keys = key_path.split('.')
        d = data
        for key in keys[:-1]:
            d = d.setdefault(key, {})
            if not isinstance(d, dict):
                raise ValueError(f"Cannot save '{key_path}': '{key}' in {user_path} is not an object")
        d[keys[-1]] = self.get_nested(key_path)

        user_path.parent.mkdir(parents=True, exist_ok=True)
        with open(user_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        logger.info("Saved %s to %s", key_path, user_path)
        return user_path

    def clear_user_settings(self) -> bool:
        """Removes the user overrides file and reloads. Returns False if there was none."""
        user_path = PathUtils.get_user_settings_file()
        removed = user_path.exists()
        if removed:
            user_path.unlink()
            logger.info("Removed user overrides %s", user_path)
        self.reset()
        return removed

    def audit_settings(self, **overrides: Any) -> AuditSettings:
        """
        Builds the engine settings from the current configuration.
        Keyword overrides with a value of None are ignored.
        """
        values = {
            "panel_selector": self.get_nested("audit.panel_selector"),
            "image_alt_severity": self.get_nested("audit.image_alt_severity"),
            "ignored_codes": self.get_nested("audit.ignored_codes"),
            "default_background": self.get_nested("styles.default_background"),
            "default_color": self.get_nested("styles.default_color"),
        }
        values.update(overrides)
        values = {k: v for k, v in values.items() if v is not None}

        try:
            return AuditSettings(**values)
        except ValidationError as e:
            logger.error("Invalid audit configuration, falling back to defaults: %s", e)
            return AuditSettings()


# The global singleton instance that the entire application will use.
config_manager = ConfigManager()
