# Utility functions and helpers

from src.utils.locale_manager import LocaleManager, tr

__all__ = [
    "LocaleManager",
    "tr",
]
