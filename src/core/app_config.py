"""
Application Configuration Manager
Centralized configuration for app metadata and version.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class AppConfig:
    """Application configuration data."""
    version: str = "1.0.0"
    name: str = "RefKeeper"
    description: str = "Reference manager"
    license: str = "MIT"


class AppConfigManager:
    """
    Read-only access to the bundled configs/app.json.

    Features:
    - Load config from JSON file, keeping defaults for missing keys
    - Singleton pattern for app-wide access
    """

    _instance: Optional['AppConfigManager'] = None

    def __new__(cls, *args, **kwargs) -> 'AppConfigManager':
        """Singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[str] = None):
        if self._initialized:
            return

        self._initialized = True

        if config_path:
            self._config_path = Path(config_path)
        else:
            from src.core.storage_paths import get_configs_path
            self._config_path = get_configs_path() / "app.json"

        self._config = AppConfig()
        self._load_config()

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the singleton (next call re-reads the config file)."""
        cls._instance = None

    def _load_config(self) -> None:
        """Load configuration from file."""
        if not self._config_path.exists():
            logger.debug("No app config at %s, using defaults", self._config_path)
            return
        try:
            with open(self._config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Error loading app config: %s", e)
            return
        for key, value in data.items():
            if hasattr(self._config, key):
                setattr(self._config, key, value)

    @property
    def version(self) -> str:
        return self._config.version

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def description(self) -> str:
        return self._config.description


# Convenience functions
def get_version() -> str:
    """Get application version."""
    return AppConfigManager().version


def get_app_name() -> str:
    """Get application name."""
    return AppConfigManager().name
