"""
Details View Factory
Builds the details widget matching the type of an external change.
"""

from typing import Optional

from src.core.database_changes import (
    BibTexStringAdd,
    BibTexStringChange,
    BibTexStringDelete,
    BibTexStringRename,
    DatabaseChange,
    EntryAdd,
    EntryChange,
    EntryDelete,
    PreambleChange,
)
from src.core.settings_manager import AppSettings
from src.models.bib_models import BibDatabaseContext
from src.ui.collab.details_views import (
    BibTexStringDetailsView,
    DatabaseChangeDetailsView,
    EntryChangeDetailsView,
    EntryWithPreviewDetailsView,
    PreambleChangeDetailsView,
)
from src.ui.preview_viewer import PreviewViewer
from src.utils.locale_manager import tr


class DatabaseChangeDetailsViewFactory:
    """Creates a fresh details view for a change; caching is up to the caller."""

    def __init__(
        self,
        database_context: BibDatabaseContext,
        preferences: AppSettings,
        preview_viewer: Optional[PreviewViewer] = None,
    ):
        self._database_context = database_context
        self._preferences = preferences
        if preview_viewer is None:
            preview_viewer = PreviewViewer(preferences)
            preview_viewer.set_database_context(database_context)
        self._preview_viewer = preview_viewer

    def create(self, change: DatabaseChange) -> DatabaseChangeDetailsView:
        if isinstance(change, EntryAdd):
            return EntryWithPreviewDetailsView(
                change.name, tr("changes.entry_added_info"), change.added_entry, self._preview_viewer)
        if isinstance(change, EntryDelete):
            return EntryWithPreviewDetailsView(
                change.name, tr("changes.entry_deleted_info"), change.deleted_entry, self._preview_viewer)
        if isinstance(change, EntryChange):
            return EntryChangeDetailsView(change, self._preview_viewer)
        if isinstance(change, BibTexStringAdd):
            return BibTexStringDetailsView(change.name, None, change.added_string)
        if isinstance(change, BibTexStringDelete):
            return BibTexStringDetailsView(change.name, change.deleted_string, None)
        if isinstance(change, (BibTexStringChange, BibTexStringRename)):
            return BibTexStringDetailsView(change.name, change.old_string, change.new_string)
        if isinstance(change, PreambleChange):
            return PreambleChangeDetailsView(change)
        raise TypeError(f"No details view for {type(change).__name__}")
