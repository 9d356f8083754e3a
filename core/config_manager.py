"""
ConfigManager Singleton - Centralized stage display settings.

Settings persist to a JSON file and are addressed with dot-notation keys.

Example:
    config = ConfigManager.get_instance()
    screen = config.get("display.screen_index", default=1)
    config.set("video.engine", "vlc")
"""

import copy
import json
from pathlib import Path
from typing import Any, Optional
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = "config/settings.json"


class ConfigManager:
    """Singleton for managing application settings."""

    _instance: Optional['ConfigManager'] = None

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        """
        Initialize ConfigManager (singleton).

        Args:
            config_path: Path to settings JSON file

        Raises:
            RuntimeError: If instance already exists
        """
        if ConfigManager._instance is not None:
            raise RuntimeError(
                "ConfigManager is a singleton. Use ConfigManager.get_instance() instead."
            )

        self.config_path = Path(config_path)
        self.settings = self._load_settings()
        logger.info(f"📋 ConfigManager initialized: {self.config_path}")

    @classmethod
    def get_instance(cls, config_path: str = DEFAULT_CONFIG_PATH) -> 'ConfigManager':
        """
        Get or create the singleton instance.

        Args:
            config_path: Path to settings JSON file (only used on first call)
        """
        if cls._instance is None:
            cls._instance = cls(config_path)
        return cls._instance

    @classmethod
    def reset_instance(cls):
        """Reset singleton instance (for testing only)."""
        cls._instance = None

    def _load_settings(self) -> dict:
        """
        Load settings from JSON file, filling gaps from the defaults.

        Returns:
            Settings dictionary
        """
        settings = self._get_defaults()

        if not self.config_path.exists():
            logger.warning(f"⚠️  Settings file not found: {self.config_path}")
            logger.info("📋 Using default settings...")
            return settings

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                stored = json.load(f)
            _deep_merge(settings, stored)
            logger.debug(f"✅ Loaded settings from {self.config_path}")
            return settings
        except (OSError, ValueError) as e:
            logger.error(f"❌ Failed to load settings: {e}")
            logger.info("📋 Using default settings...")
            return self._get_defaults()

    def _get_defaults(self) -> dict:
        """
        Get default settings structure.

        Returns:
            Dictionary with default configuration
        """
        return {
            "display": {
                "screen_index": 1,
                "stage_screen_index": None,  # None = no stage view window
                "show_border": False,
                "background": {
                    "type": "colour",  # "colour" | "image" | "video"
                    "path": None,
                }
            },
            "notices": {
                "duration_ms": 8000,
                "font_size": 28,
            },
            "video": {
                "engine": "auto",  # "mpv" | "vlc" | "auto" - Auto: MPV-first, fallback to VLC
                "loop": True,
                "legacy_hardware": False,
            },
            "paths": {
                "logs_root": "logs"
            }
        }

    def save(self) -> bool:
        """
        Persist settings to disk.

        Returns:
            True if successful, False otherwise
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(self.settings, f, indent=2, ensure_ascii=False)
            logger.debug(f"💾 Settings saved to {self.config_path}")
            return True
        except (OSError, TypeError) as e:
            logger.error(f"❌ Failed to save settings: {e}")
            return False

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get setting by dot-notation path.

        Args:
            key_path: Path to setting (e.g., "display.screen_index")
            default: Default value if key not found

        Returns:
            Setting value or default
        """
        keys = key_path.split('.')
        value = self.settings

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                logger.debug(f"⚠️  Setting '{key_path}' not found, using default")
                return default

        return value

    def set(self, key_path: str, value: Any) -> bool:
        """
        Set setting by dot-notation path and persist.

        Args:
            key_path: Path to setting (e.g., "video.engine")
            value: New value to set

        Returns:
            True if successful, False otherwise
        """
        keys = key_path.split('.')
        target = self.settings

        # Navigate/create nested dictionaries
        for key in keys[:-1]:
            if key not in target:
                target[key] = {}
            elif not isinstance(target[key], dict):
                logger.error(
                    f"❌ Cannot set '{key_path}': '{key}' is not a dictionary"
                )
                return False
            target = target[key]

        target[keys[-1]] = value
        logger.debug(f"⚙️  Set {key_path} = {value}")

        return self.save()

    def get_all(self) -> dict:
        """Get all settings (deep copy for safety)."""
        return copy.deepcopy(self.settings)

    def reset_to_defaults(self) -> bool:
        """
        Reset all settings to defaults and persist.

        Returns:
            True if successful
        """
        self.settings = self._get_defaults()
        logger.info("🔄 Settings reset to defaults")
        return self.save()

    def merge_settings(self, new_settings: dict) -> bool:
        """
        Deep merge new settings into current settings.

        Args:
            new_settings: Dictionary with settings to merge

        Example:
            >>> config.merge_settings({"display": {"screen_index": 0}})
        """
        _deep_merge(self.settings, new_settings)
        logger.debug("🔀 Merged settings")
        return self.save()

    def __repr__(self) -> str:
        return f"<ConfigManager path={self.config_path}>"


def _deep_merge(base: dict, updates: dict) -> None:
    for key, value in updates.items():
        if isinstance(value, dict) and key in base and isinstance(base[key], dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
