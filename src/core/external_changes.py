"""
External Changes
Entry point used when the library file was modified by another program.
"""

import logging
from typing import Optional, Sequence

from PySide6.QtGui import QUndoStack

from src.core.database_changes import DatabaseChange
from src.models.bib_models import BibDatabaseContext

logger = logging.getLogger(__name__)


def resolve_external_changes(
    changes: Sequence[DatabaseChange],
    database_context: BibDatabaseContext,
    dialog_service,
    title: str,
    undo_stack: Optional[QUndoStack] = None,
    preferences=None,
) -> bool:
    """
    Let the user go through ``changes`` and merge the accepted ones.

    Returns:
        True if every change was accepted or denied, False if there was nothing
        to resolve or the user closed the dialog early.
    """
    if not changes:
        logger.debug("No external changes for %s", database_context.display_name)
        return False

    from src.ui.dialogs.changes_resolver_dialog import DatabaseChangesResolverDialog

    dialog = DatabaseChangesResolverDialog(
        changes,
        database_context,
        title,
        dialog_service.parent,
        undo_stack=undo_stack,
        preferences=preferences,
    )
    resolved = bool(dialog_service.show_custom_dialog_and_wait(dialog))
    if resolved and not dialog.are_all_changes_denied():
        database_context.changed = True
    logger.info(
        "External changes for %s: resolved=%s, all accepted=%s, all denied=%s",
        database_context.display_name,
        resolved,
        dialog.are_all_changes_accepted(),
        dialog.are_all_changes_denied(),
    )
    return resolved
