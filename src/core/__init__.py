# Core business logic modules

from src.core.app_config import AppConfigManager
from src.core.errors import (
    BibDatabaseError,
    EntryNotFoundError,
    KeyCollisionError,
    StringNotFoundError,
)
from src.core.settings_manager import AppSettings, SettingsManager

__all__ = [
    "AppConfigManager",
    "AppSettings",
    "SettingsManager",
    "BibDatabaseError",
    "EntryNotFoundError",
    "KeyCollisionError",
    "StringNotFoundError",
]
