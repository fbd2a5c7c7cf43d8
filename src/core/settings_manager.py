"""
Settings Manager
Handles application settings persistence with JSON storage.
"""

import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Optional

from src.core.environment import get_config

logger = logging.getLogger(__name__)


@dataclass
class AppSettings:
    """Application settings data structure."""
    # Appearance
    theme: str = "default"  # Theme pack ID (e.g., "default", "light")
    language: str = "en"
    preview_font_size: int = 11

    # External changes dialog
    resolver_dialog_width: int = 1000
    resolver_dialog_height: int = 650

    # Merge dialog
    merge_dialog_width: int = 900
    merge_dialog_height: int = 600


class SettingsManager:
    """
    Manages application settings with automatic persistence.

    Features:
    - Load/save settings from JSON file
    - Default values for missing or unknown settings
    - Auto-save on change (optional)

    Usage:
        settings = SettingsManager()
        settings.set("theme", "light")
        theme = settings.get("theme")
    """

    _instance: Optional['SettingsManager'] = None

    def __new__(cls, *args, **kwargs) -> 'SettingsManager':
        """Singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, settings_path: Optional[str] = None, auto_save: bool = True):
        """
        Initialize SettingsManager.

        Args:
            settings_path: Path to settings JSON file
            auto_save: Automatically save when settings change
        """
        if self._initialized:
            return

        self._initialized = True

        if settings_path:
            self._settings_path = Path(settings_path)
        else:
            from src.core.storage_paths import get_settings_file_path
            self._settings_path = get_settings_file_path()

        self._auto_save = auto_save
        self._settings = AppSettings()

        self._load()

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the singleton (next call re-reads from disk)."""
        cls._instance = None

    def _load(self) -> None:
        """Load settings from file."""
        if not self._settings_path.exists():
            return
        try:
            with open(self._settings_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Error loading settings from %s: %s", self._settings_path, e)
            return
        for key, value in data.items():
            if hasattr(self._settings, key):
                setattr(self._settings, key, value)
            else:
                logger.debug("Ignoring unknown setting %r", key)

    def save(self) -> bool:
        """
        Save settings to file.

        Returns:
            True if successful, False otherwise
        """
        try:
            self._settings_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._settings_path, 'w', encoding='utf-8') as f:
                json.dump(asdict(self._settings), f, indent=2)
            return True
        except OSError as e:
            logger.error("Error saving settings to %s: %s", self._settings_path, e)
            return False

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value."""
        return getattr(self._settings, key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a setting value."""
        if hasattr(self._settings, key):
            setattr(self._settings, key, value)
            if self._auto_save and get_config().persist_settings:
                self.save()

    @property
    def settings(self) -> AppSettings:
        """Get the settings object."""
        return self._settings
