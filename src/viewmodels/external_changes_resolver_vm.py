"""
External Changes Resolver ViewModel
Keeps the resolution state of a list of external changes, no widgets here.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QUndoStack

from src.core.database_changes import DatabaseChange
from src.core.undo_commands import CompoundCommand
from src.utils.locale_manager import tr

logger = logging.getLogger(__name__)


class ExternalChangesResolverViewModel(QObject):
    """
    Tracks which external changes are accepted, denied or still open.

    - ``visible_changes`` holds the changes the user has not decided on yet
    - ``changes`` holds every change, with merged versions replacing originals
    - once nothing is left to decide, accepted changes are applied as a single
      undoable step and ``all_changes_resolved_changed(True)`` is emitted
    """

    selected_change_changed = Signal(object)
    can_ask_user_to_resolve_change_changed = Signal(bool)
    visible_changes_changed = Signal()
    all_changes_resolved_changed = Signal(bool)

    def __init__(self, changes: Sequence[DatabaseChange], undo_stack: QUndoStack,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self._changes: List[DatabaseChange] = list(changes)
        self._visible_changes: List[DatabaseChange] = list(changes)
        self._undo_stack = undo_stack
        self._selected_change: Optional[DatabaseChange] = None
        self._can_ask_user_to_resolve_change = False
        self._all_changes_resolved = not self._visible_changes

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def changes(self) -> List[DatabaseChange]:
        return list(self._changes)

    @property
    def visible_changes(self) -> List[DatabaseChange]:
        return list(self._visible_changes)

    @property
    def selected_change(self) -> Optional[DatabaseChange]:
        return self._selected_change

    @selected_change.setter
    def selected_change(self, change: Optional[DatabaseChange]) -> None:
        if change is self._selected_change:
            return
        self._selected_change = change
        self.selected_change_changed.emit(change)
        self._update_can_ask_user_to_resolve_change()

    @property
    def can_ask_user_to_resolve_change(self) -> bool:
        return self._can_ask_user_to_resolve_change

    def are_all_changes_resolved(self) -> bool:
        return not self._visible_changes

    def are_all_changes_accepted(self) -> bool:
        return all(change.accepted for change in self._changes)

    def are_all_changes_denied(self) -> bool:
        return not any(change.accepted for change in self._changes)

    # ------------------------------------------------------------------
    # User decisions
    # ------------------------------------------------------------------
    def accept_change(self) -> None:
        change = self._selected_change
        if change is None:
            return
        change.accept()
        logger.debug("Accepted %r", change)
        self._remove_visible_change(change)

    def deny_change(self) -> None:
        change = self._selected_change
        if change is None:
            return
        logger.debug("Denied %r", change)
        self._remove_visible_change(change)

    def accept_merged_change(self, merged_change: DatabaseChange) -> None:
        """Replace the selected change by a user-merged version and accept it."""
        if merged_change is None:
            raise ValueError("merged_change must not be None")
        old_change = self._selected_change
        if old_change is None:
            return
        self._changes = [c for c in self._changes if c is not old_change]
        self._changes.append(merged_change)
        merged_change.accept()
        logger.debug("Accepted merged %r in place of %r", merged_change, old_change)
        self._remove_visible_change(old_change)

    def apply_changes(self) -> None:
        """Apply every accepted change as one undoable step."""
        compound = CompoundCommand(tr("undo.merged_external_changes"))
        accepted = [change for change in self._changes if change.accepted]
        for change in accepted:
            change.apply_change(compound)
        if compound.child_count() == 0:
            logger.info("No accepted external change to apply")
            return
        self._undo_stack.push(compound)
        logger.info("Applied %d external change(s)", len(accepted))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _remove_visible_change(self, change: DatabaseChange) -> None:
        self._visible_changes = [c for c in self._visible_changes if c is not change]
        self.visible_changes_changed.emit()
        self._update_all_changes_resolved()

    def _update_all_changes_resolved(self) -> None:
        resolved = self.are_all_changes_resolved()
        if resolved == self._all_changes_resolved:
            return
        self._all_changes_resolved = resolved
        if resolved:
            self.apply_changes()
        self.all_changes_resolved_changed.emit(resolved)

    def _update_can_ask_user_to_resolve_change(self) -> None:
        change = self._selected_change
        can_ask = change is not None and change.external_change_resolver is not None
        if can_ask != self._can_ask_user_to_resolve_change:
            self._can_ask_user_to_resolve_change = can_ask
            self.can_ask_user_to_resolve_change_changed.emit(can_ask)
