"""
Dialog components for the RefKeeper UI.
"""

from src.ui.dialogs.changes_resolver_dialog import DatabaseChangesResolverDialog
from src.ui.dialogs.merge_entries_dialog import MergeEntriesDialog

__all__ = [
    "DatabaseChangesResolverDialog",
    "MergeEntriesDialog",
]
