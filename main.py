"""
RefKeeper
Demo entry point: opens the external changes dialog on a sample library.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from PySide6.QtGui import QUndoStack
from PySide6.QtWidgets import QApplication

from src.core.app_config import get_app_name, get_version
from src.core.external_changes import resolve_external_changes
from src.core.sample_library import build_sample
from src.core.settings_manager import SettingsManager
from src.ui.dialog_service import DialogService
from src.ui.theme_manager import ThemeManager
from src.utils.locale_manager import LocaleManager, tr
from src.utils.logging_setup import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="refkeeper",
        description="Review and merge changes made to a library by another program.",
    )
    parser.add_argument("--lang", help="UI language code (e.g. en, vi)")
    parser.add_argument("--theme", help="Theme pack id (e.g. default, light)")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, ...)")
    parser.add_argument("--version", action="store_true", help="Print the version and exit")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Application entry point."""
    args = build_parser().parse_args(argv)

    if args.version:
        print(f"{get_app_name()} {get_version()}")
        return 0

    configure_logging(args.log_level)

    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setApplicationName(get_app_name())
    app.setApplicationVersion(get_version())
    app.setStyle("Fusion")

    settings = SettingsManager()
    language = args.lang or settings.get("language", "en")
    if not LocaleManager().set_language(language):
        logger.warning("Language '%s' is not available", language)
    ThemeManager.apply_theme(args.theme or settings.get("theme"), app)

    undo_stack = QUndoStack()
    dialog_service = DialogService()
    database_context, changes = build_sample(dialog_service)

    resolved = resolve_external_changes(
        changes,
        database_context,
        dialog_service,
        tr("changes.dialog_title", name=database_context.display_name),
        undo_stack=undo_stack,
        preferences=settings.settings,
    )

    database = database_context.database
    summary = tr(
        "main.summary",
        entries=database.entry_count,
        strings=len(database.strings),
        changed=tr("common.yes") if database_context.changed else tr("common.no"),
    )
    logger.info(summary)
    if resolved:
        dialog_service.notify(summary, get_app_name())
    return 0 if resolved else 1


if __name__ == "__main__":
    sys.exit(main())
