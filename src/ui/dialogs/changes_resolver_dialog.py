"""
External changes dialog: review, accept, dismiss or merge the changes another
program made to the open library.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence

from PySide6.QtCore import Qt
from PySide6.QtGui import QUndoStack
from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QPushButton,
    QSplitter,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from src.core.database_changes import DatabaseChange
from src.core.settings_manager import AppSettings
from src.models.bib_models import BibDatabaseContext
from src.ui.base import BaseDialog
from src.ui.collab.details_view_factory import DatabaseChangeDetailsViewFactory
from src.ui.collab.details_views import DatabaseChangeDetailsView
from src.ui.collab.json_diff_view import JsonDiffView
from src.ui.components.table import ReusableTable, TableColumn
from src.ui.preview_viewer import PreviewViewer
from src.utils.locale_manager import tr
from src.viewmodels.external_changes_resolver_vm import ExternalChangesResolverViewModel

logger = logging.getLogger(__name__)


class DatabaseChangesResolverDialog(QDialog, BaseDialog):
    """Dialog going through ``changes``, which are diffs to ``database_context``.

    Every accepted change is written to the database once all changes have been
    accepted or denied; the dialog then closes itself. ``get_result()`` tells
    whether the changes were resolved (``False`` when the user closed early).
    """

    def __init__(
        self,
        changes: Sequence[DatabaseChange],
        database_context: BibDatabaseContext,
        dialog_title: str,
        parent: Optional[QWidget] = None,
        *,
        undo_stack: Optional[QUndoStack] = None,
        preferences: Optional[AppSettings] = None,
    ):
        super().__init__(parent)
        self._changes = list(changes)
        self._database_context = database_context

        # One details view per change, keyed by identity
        self._details_view_cache: Dict[DatabaseChange, DatabaseChangeDetailsView] = {}
        self._change_info_widget: Optional[QTabWidget] = None

        self._undo_stack = undo_stack if undo_stack is not None else QUndoStack(self)
        if preferences is None:
            from src.core.settings_manager import SettingsManager
            preferences = SettingsManager().settings
        self._preferences = preferences

        self._all_changes_accepted = False
        self._all_changes_denied = False
        self._resolved = False

        self.setWindowTitle(dialog_title)
        self.setMinimumSize(800, 500)
        self.resize(preferences.resolver_dialog_width, preferences.resolver_dialog_height)

        self._setup_ui()
        self._initialize()

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------
    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setSpacing(12)

        info_label = QLabel(tr("changes.dialog_info"))
        info_label.setStyleSheet("color: gray; font-size: 11px;")
        info_label.setWordWrap(True)
        layout.addWidget(info_label)

        splitter = QSplitter(Qt.Horizontal)

        self.changes_table = ReusableTable([
            TableColumn("name", tr("changes.column_name"), QHeaderView.Stretch),
        ])
        self.changes_table.setMinimumWidth(240)
        splitter.addWidget(self.changes_table)

        self.change_info_pane = QWidget()
        self._change_info_layout = QVBoxLayout(self.change_info_pane)
        self._change_info_layout.setContentsMargins(0, 0, 0, 0)
        splitter.addWidget(self.change_info_pane)
        splitter.setSizes([280, 720])
        layout.addWidget(splitter, stretch=1)

        buttons = QHBoxLayout()
        self.ask_user_to_resolve_change_button = QPushButton(tr("changes.merge_manually"))
        self.ask_user_to_resolve_change_button.setToolTip(tr("changes.merge_manually_tooltip"))
        self.ask_user_to_resolve_change_button.clicked.connect(self.ask_user_to_resolve_change)
        buttons.addWidget(self.ask_user_to_resolve_change_button)
        buttons.addStretch()

        self.deny_button = QPushButton(tr("changes.dismiss"))
        self.deny_button.clicked.connect(self.deny_changes)
        buttons.addWidget(self.deny_button)

        self.accept_button = QPushButton(tr("changes.accept"))
        self.accept_button.setObjectName("primary")
        self.accept_button.clicked.connect(self.accept_changes)
        buttons.addWidget(self.accept_button)

        layout.addLayout(buttons)

    def _initialize(self) -> None:
        preview_viewer = PreviewViewer(self._preferences)
        preview_viewer.set_database_context(self._database_context)
        self._details_view_factory = DatabaseChangeDetailsViewFactory(
            self._database_context, self._preferences, preview_viewer)

        self._view_model = ExternalChangesResolverViewModel(self._changes, self._undo_stack, parent=self)

        self.ask_user_to_resolve_change_button.setEnabled(self._view_model.can_ask_user_to_resolve_change)
        self._view_model.can_ask_user_to_resolve_change_changed.connect(
            self.ask_user_to_resolve_change_button.setEnabled)

        self._view_model.selected_change_changed.connect(self._on_selected_change)
        self._view_model.visible_changes_changed.connect(self._refresh_changes_table)
        self._view_model.all_changes_resolved_changed.connect(self._on_all_changes_resolved)
        self.changes_table.item_selected.connect(self._on_table_selection)

        self._refresh_changes_table()

    # ------------------------------------------------------------------
    # Table <-> view model
    # ------------------------------------------------------------------
    def _refresh_changes_table(self) -> None:
        """Show the unresolved changes, keeping the selection at the same row."""
        current_row = max(self.changes_table.currentRow(), 0)
        visible = self._view_model.visible_changes
        self.changes_table.clearSelection()
        self.changes_table.set_data([{"name": change.name, "_change": change} for change in visible])
        if visible:
            self.changes_table.selectRow(min(current_row, len(visible) - 1))
        self._on_table_selection(self.changes_table.get_selected_rows())

    def _on_table_selection(self, rows: list) -> None:
        row_data = self.changes_table.get_row_data(rows[0]) if rows else None
        self._view_model.selected_change = row_data.get("_change") if row_data else None

    def _on_selected_change(self, selected_change: Optional[DatabaseChange]) -> None:
        if selected_change is None:
            return
        if selected_change not in self._details_view_cache:
            self._details_view_cache[selected_change] = self._details_view_factory.create(selected_change)
        details_view = self._details_view_cache[selected_change]

        self._clear_change_info()

        tab_widget = QTabWidget()
        tab_widget.addTab(details_view, tr("changes.tab_details"))
        tab_widget.addTab(JsonDiffView(selected_change), tr("changes.tab_json_diff"))
        self._change_info_layout.addWidget(tab_widget)
        self._change_info_widget = tab_widget

    def _clear_change_info(self) -> None:
        old = self._change_info_widget
        if old is None:
            return
        self._change_info_layout.removeWidget(old)
        # The cached details view must outlive the tab widget it was shown in
        for details_view in self._details_view_cache.values():
            if old.indexOf(details_view) >= 0:
                old.removeTab(old.indexOf(details_view))
                details_view.setParent(None)
        old.deleteLater()
        self._change_info_widget = None

    def _on_all_changes_resolved(self, is_resolved: bool) -> None:
        if is_resolved:
            self._all_changes_accepted = self._view_model.are_all_changes_accepted()
            self._all_changes_denied = self._view_model.are_all_changes_denied()
            self.accept()

    # ------------------------------------------------------------------
    # Result
    # ------------------------------------------------------------------
    def done(self, result: int) -> None:
        if self._view_model.are_all_changes_resolved():
            logger.info("External changes are resolved successfully")
            self._resolved = True
        else:
            logger.info("External changes aren't resolved")
            self._resolved = False
        super().done(QDialog.Accepted if self._resolved else QDialog.Rejected)

    def get_result(self) -> bool:
        return self._resolved

    def are_all_changes_accepted(self) -> bool:
        return self._all_changes_accepted

    def are_all_changes_denied(self) -> bool:
        return self._all_changes_denied

    @property
    def view_model(self) -> ExternalChangesResolverViewModel:
        return self._view_model

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def deny_changes(self) -> None:
        self._view_model.deny_change()

    def accept_changes(self) -> None:
        self._view_model.accept_change()

    def ask_user_to_resolve_change(self) -> None:
        selected_change = self._view_model.selected_change
        if selected_change is None:
            return
        resolver = selected_change.external_change_resolver
        if resolver is None:
            return
        merged_change = resolver.ask_user_to_resolve_change()
        if merged_change is not None:
            self._view_model.accept_merged_change(merged_change)
