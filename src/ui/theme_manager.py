"""
Theme Manager - applies theme packs to the running application.
"""

import logging
from typing import Optional

from PySide6.QtWidgets import QApplication

from src.ui.themes import ThemePack, ThemeRegistry

logger = logging.getLogger(__name__)


class ThemeManager:
    """
    Manages application themes using the Theme Pack system.

    Usage:
        ThemeManager.apply_theme()          # current theme
        ThemeManager.apply_theme("light")   # specific theme
    """

    _current_theme_id: str = "default"

    @classmethod
    def apply_theme(cls, theme_id: Optional[str] = None, app: Optional[QApplication] = None) -> bool:
        """
        Apply a theme pack to the application.

        Unknown theme ids fall back to the default pack.

        Returns:
            True if a stylesheet was applied, False when there is no application.
        """
        if app is None:
            app = QApplication.instance()

        if not app:
            return False

        if theme_id:
            cls._current_theme_id = theme_id

        theme = ThemeRegistry.get(cls._current_theme_id)
        if not theme:
            logger.warning("Unknown theme '%s', using default", cls._current_theme_id)
            theme = ThemeRegistry.get_default()
            cls._current_theme_id = theme.id

        app.setStyleSheet(theme.get_stylesheet())
        return True

    @classmethod
    def get_current_theme_id(cls) -> str:
        return cls._current_theme_id

    @classmethod
    def get_current_theme(cls) -> ThemePack:
        theme = ThemeRegistry.get(cls._current_theme_id)
        return theme if theme else ThemeRegistry.get_default()

    @classmethod
    def get_available_themes(cls) -> list:
        return ThemeRegistry.get_theme_list()
