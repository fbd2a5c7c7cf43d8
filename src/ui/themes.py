"""
Theme Pack System
Each theme is a self-contained pack with its colors and generated stylesheet.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class ThemeColors:
    """Color definitions for a theme."""
    # Base colors
    background: str = "#1e1e1e"
    background_secondary: str = "#252526"
    surface: str = "#3c3c3c"

    # Text colors
    text_primary: str = "#e0e0e0"
    text_secondary: str = "#b0b0b0"
    text_disabled: str = "#666666"

    # Accent
    accent: str = "#3f7fd0"
    accent_hover: str = "#5a93dc"

    border: str = "#3c3c3c"

    # Diff highlighting
    added: str = "#2e7d32"
    removed: str = "#c62828"


@dataclass
class ThemePack:
    """A complete theme pack definition."""
    id: str
    name: str
    description: str = ""
    colors: ThemeColors = field(default_factory=ThemeColors)
    is_dark: bool = True

    def get_stylesheet(self) -> str:
        """Generate the QSS stylesheet for this theme."""
        c = self.colors

        return f"""
QWidget {{
    background-color: {c.background};
    color: {c.text_primary};
}}

QLabel, QAbstractButton, QRadioButton {{
    background-color: transparent;
}}

QPushButton {{
    background-color: {c.surface};
    border: 1px solid {c.border};
    border-radius: 4px;
    padding: 6px 14px;
}}

QPushButton:hover {{
    border-color: {c.accent};
}}

QPushButton:disabled {{
    color: {c.text_disabled};
}}

QPushButton#primary {{
    background-color: {c.accent};
    color: #ffffff;
    border: none;
}}

QPushButton#primary:hover {{
    background-color: {c.accent_hover};
}}

QTableWidget, QTextBrowser, QPlainTextEdit {{
    background-color: {c.background_secondary};
    border: 1px solid {c.border};
    gridline-color: {c.border};
}}

QTableWidget::item:selected {{
    background-color: {c.accent};
    color: #ffffff;
}}

QHeaderView::section {{
    background-color: {c.surface};
    color: {c.text_secondary};
    border: none;
    padding: 4px;
}}

QTabWidget::pane {{
    border: 1px solid {c.border};
}}

QTabBar::tab {{
    background-color: {c.background_secondary};
    color: {c.text_secondary};
    padding: 6px 12px;
}}

QTabBar::tab:selected {{
    color: {c.text_primary};
    border-bottom: 2px solid {c.accent};
}}
"""


class ThemeRegistry:
    """
    Registry of all available theme packs.

    To add a new theme:
    1. Create a ThemePack instance with unique id
    2. Register it using ThemeRegistry.register()
    """

    _themes: Dict[str, ThemePack] = {}
    _default_theme_id: str = "default"

    @classmethod
    def register(cls, theme: ThemePack) -> None:
        cls._themes[theme.id] = theme

    @classmethod
    def get(cls, theme_id: str) -> Optional[ThemePack]:
        return cls._themes.get(theme_id)

    @classmethod
    def get_default(cls) -> ThemePack:
        return cls._themes.get(cls._default_theme_id, _create_default_theme())

    @classmethod
    def get_theme_list(cls) -> list:
        """Get list of (id, name) tuples."""
        return [(t.id, t.name) for t in cls._themes.values()]


def _create_default_theme() -> ThemePack:
    return ThemePack(
        id="default",
        name="Default",
        description="Dark theme with blue accent",
        colors=ThemeColors(),
        is_dark=True,
    )


def _create_light_theme() -> ThemePack:
    return ThemePack(
        id="light",
        name="Light",
        description="Light theme for bright environments",
        colors=ThemeColors(
            background="#fafafa",
            background_secondary="#ffffff",
            surface="#eeeeee",
            text_primary="#202020",
            text_secondary="#505050",
            text_disabled="#a0a0a0",
            accent="#1e63b8",
            accent_hover="#2f76cc",
            border="#d0d0d0",
            added="#1b5e20",
            removed="#b71c1c",
        ),
        is_dark=False,
    )


# Register built-in themes
ThemeRegistry.register(_create_default_theme())
ThemeRegistry.register(_create_light_theme())
