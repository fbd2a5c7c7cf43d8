"""
Locale Manager - Multi-language Support System
Handles loading, switching, and retrieving localized strings.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Dict, Any, List

logger = logging.getLogger(__name__)


@dataclass
class LanguageInfo:
    """Information about a supported language."""
    code: str
    name: str
    native_name: str


# Language metadata
LANGUAGES: Dict[str, LanguageInfo] = {
    "en": LanguageInfo("en", "English", "English"),
    "vi": LanguageInfo("vi", "Vietnamese", "Tiếng Việt"),
}


class LocaleManager:
    """
    Manages application localization.

    Features:
    - Load locale files from JSON
    - Switch languages at runtime
    - Nested key access (e.g., "changes.entry_added")
    - Placeholder substitution, falling back to English and then to the key

    Usage:
        locale = LocaleManager()
        locale.set_language("vi")
        text = locale.get("changes.entry_added", key="Smith2020")
    """

    _instance: Optional['LocaleManager'] = None

    def __new__(cls, *args, **kwargs) -> 'LocaleManager':
        """Singleton pattern to ensure one locale manager across the app."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, locales_dir: Optional[str] = None, default_language: str = "en"):
        """
        Initialize the LocaleManager.

        Args:
            locales_dir: Directory containing locale JSON files.
                        Defaults to the bundled 'locales' folder.
            default_language: Default language code (e.g., 'en', 'vi')
        """
        if self._initialized:
            return

        self._initialized = True

        if locales_dir:
            self._locales_dir = Path(locales_dir)
        else:
            from src.core.storage_paths import get_locales_path
            self._locales_dir = get_locales_path()

        self._current_language: str = default_language
        self._fallback_language: str = "en"
        self._translations: Dict[str, Dict[str, Any]] = {}

        self._load_all_translations()

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the singleton (next call reloads the locale files)."""
        cls._instance = None

    def _load_all_translations(self) -> None:
        """Load all available locale files."""
        if not self._locales_dir.exists():
            logger.warning("Locales directory not found: %s", self._locales_dir)
            return

        for locale_file in sorted(self._locales_dir.glob("*.json")):
            lang_code = locale_file.stem
            try:
                with open(locale_file, 'r', encoding='utf-8') as f:
                    self._translations[lang_code] = json.load(f)
                logger.debug("Loaded locale: %s", lang_code)
            except (json.JSONDecodeError, OSError) as e:
                logger.error("Error loading locale %s: %s", lang_code, e)

    def get_available_languages(self) -> List[LanguageInfo]:
        """List of languages that have a locale file."""
        available = []
        for code in self._translations.keys():
            available.append(LANGUAGES.get(code, LanguageInfo(code, code.upper(), code.upper())))
        return available

    @property
    def current_language(self) -> str:
        """Get the current language code."""
        return self._current_language

    def set_language(self, language: str) -> bool:
        """
        Switch to a different language.

        Returns:
            True if switch was successful, False otherwise
        """
        if language not in self._translations:
            logger.warning("Failed to switch to language: %s", language)
            return False
        self._current_language = language
        return True

    def get(self, key_path: str, default: Optional[str] = None, **kwargs) -> str:
        """
        Get a translated string by key.

        Args:
            key_path: Dot-notation key (e.g., "changes.accept", "common.close")
            default: Default value if key not found
            **kwargs: Placeholder values for string formatting

        Returns:
            Translated string with placeholders replaced
        """
        value = self._get_nested_value(self._current_language, key_path)

        if value is None and self._current_language != self._fallback_language:
            value = self._get_nested_value(self._fallback_language, key_path)

        if value is None:
            value = default if default is not None else key_path

        if kwargs:
            try:
                value = value.format(**kwargs)
            except (KeyError, IndexError, ValueError):
                logger.debug("Could not format %r with %r", key_path, kwargs)

        return value

    def _get_nested_value(self, language: str, key: str) -> Optional[str]:
        if language not in self._translations:
            return None

        value: Any = self._translations[language]
        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return None

        return value if isinstance(value, str) else None


# Convenience function for quick access
def tr(key_path: str, default: Optional[str] = None, **kwargs) -> str:
    """
    Shorthand function for getting translations.

    Usage:
        from src.utils.locale_manager import tr
        text = tr("changes.accept")
    """
    return LocaleManager().get(key_path, default, **kwargs)
