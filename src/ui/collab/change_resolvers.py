"""Change Resolvers

A resolver lets the user build a merged version of a change by hand. Only
modified entries can be merged; other change types have no resolver.
"""

from __future__ import annotations

import logging
from typing import Optional

from src.core.database_changes import DatabaseChange, EntryChange
from src.models.bib_models import BibDatabaseContext
from src.ui.dialog_service import DialogService
from src.utils.locale_manager import tr

logger = logging.getLogger(__name__)


class DatabaseChangeResolver:
    """Produces a user-mediated replacement for one change."""

    def __init__(self, change: DatabaseChange):
        self._change = change

    def ask_user_to_resolve_change(self) -> Optional[DatabaseChange]:
        """Return the merged change, or ``None`` if the user gave up."""
        raise NotImplementedError


class EntryChangeResolver(DatabaseChangeResolver):
    """Opens the merge dialog on the library and disk versions of an entry."""

    def __init__(self, entry_change: EntryChange, database_context: BibDatabaseContext,
                 dialog_service: Optional[DialogService] = None):
        super().__init__(entry_change)
        self._database_context = database_context
        self._dialog_service = dialog_service or DialogService()

    def ask_user_to_resolve_change(self) -> Optional[DatabaseChange]:
        from src.ui.dialogs.merge_entries_dialog import MergeEntriesDialog

        dialog = MergeEntriesDialog(
            self._change.old_entry,
            self._change.new_entry,
            left_label=tr("changes.in_library"),
            right_label=tr("changes.on_disk"),
            database_context=self._database_context,
            parent=self._dialog_service.parent,
        )
        merged_entry = self._dialog_service.show_custom_dialog_and_wait(dialog)
        if merged_entry is None:
            logger.debug("Merge of %s cancelled", self._change.old_entry.display_key)
            return None
        return EntryChange(
            self._change.old_entry,
            merged_entry,
            self._database_context,
            self._dialog_service,
        )
