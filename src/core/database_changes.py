"""
Database Changes
Each DatabaseChange describes one difference between the library that is open
in memory and the copy found on disk, and knows how to apply itself as undo
commands on the in-memory database.

Changes are created by the caller (detection is not part of this module) and
are compared by identity.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, TYPE_CHECKING

from src.core.undo_commands import (
    AddStringCommand,
    ChangePreambleCommand,
    ChangeStringContentCommand,
    CompoundCommand,
    InsertEntryCommand,
    RemoveEntryCommand,
    RemoveStringCommand,
    RenameStringCommand,
    ReplaceEntryCommand,
)
from src.models.bib_models import BibDatabaseContext, BibEntry, BibtexString
from src.utils.locale_manager import tr

if TYPE_CHECKING:
    from src.ui.collab.change_resolvers import DatabaseChangeResolver
    from src.ui.dialog_service import DialogService

logger = logging.getLogger(__name__)

JsonPair = tuple[dict[str, Any], dict[str, Any]]


class DatabaseChange:
    """Base class of all external changes."""

    def __init__(self, database_context: BibDatabaseContext):
        self._database_context = database_context
        self._accepted = False
        self._name = ""

    @property
    def name(self) -> str:
        return self._name

    @property
    def database_context(self) -> BibDatabaseContext:
        return self._database_context

    @property
    def accepted(self) -> bool:
        return self._accepted

    def accept(self) -> None:
        self._accepted = True

    def set_accepted(self, accepted: bool) -> None:
        self._accepted = accepted

    @property
    def external_change_resolver(self) -> Optional["DatabaseChangeResolver"]:
        """Resolver able to ask the user for a merged version, if any."""
        return None

    def apply_change(self, compound: CompoundCommand) -> None:
        """Run the undo commands performing this change and add them to ``compound``."""
        raise NotImplementedError

    def to_json_pair(self) -> JsonPair:
        """Snapshots of the affected data before and after the change."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._name!r} accepted={self._accepted}>"


# ============================================================================
# Entries
# ============================================================================

class EntryAdd(DatabaseChange):
    """An entry exists on disk but not in the open library."""

    def __init__(self, added_entry: BibEntry, database_context: BibDatabaseContext):
        super().__init__(database_context)
        self.added_entry = added_entry
        self._name = tr("changes.entry_added", key=added_entry.display_key)

    def apply_change(self, compound: CompoundCommand) -> None:
        compound.add(InsertEntryCommand(self._database_context.database, self.added_entry))

    def to_json_pair(self) -> JsonPair:
        return {}, self.added_entry.to_dict()


class EntryDelete(DatabaseChange):
    """An entry of the open library was removed on disk."""

    def __init__(self, deleted_entry: BibEntry, database_context: BibDatabaseContext):
        super().__init__(database_context)
        self.deleted_entry = deleted_entry
        self._name = tr("changes.entry_deleted", key=deleted_entry.display_key)

    def apply_change(self, compound: CompoundCommand) -> None:
        database = self._database_context.database
        if not database.has_entry(self.deleted_entry):
            logger.warning("Entry %s is already gone from the library", self.deleted_entry.display_key)
            return
        compound.add(RemoveEntryCommand(database, self.deleted_entry))

    def to_json_pair(self) -> JsonPair:
        return self.deleted_entry.to_dict(), {}


class EntryChange(DatabaseChange):
    """An entry of the open library was modified on disk."""

    def __init__(
        self,
        old_entry: BibEntry,
        new_entry: BibEntry,
        database_context: BibDatabaseContext,
        dialog_service: Optional["DialogService"] = None,
    ):
        super().__init__(database_context)
        self.old_entry = old_entry
        self.new_entry = new_entry
        self._dialog_service = dialog_service
        self._resolver: Optional["DatabaseChangeResolver"] = None
        self._name = tr("changes.entry_modified", key=old_entry.display_key)

    @property
    def external_change_resolver(self) -> Optional["DatabaseChangeResolver"]:
        if self._resolver is None:
            from src.ui.collab.change_resolvers import EntryChangeResolver
            self._resolver = EntryChangeResolver(self, self._database_context, self._dialog_service)
        return self._resolver

    def apply_change(self, compound: CompoundCommand) -> None:
        database = self._database_context.database
        if not database.has_entry(self.old_entry):
            logger.warning("Entry %s is no longer in the library, adding the modified version",
                           self.old_entry.display_key)
            compound.add(InsertEntryCommand(database, self.new_entry))
            return
        compound.add(ReplaceEntryCommand(database, self.old_entry, self.new_entry))

    def to_json_pair(self) -> JsonPair:
        return self.old_entry.to_dict(), self.new_entry.to_dict()


# ============================================================================
# @string definitions
# ============================================================================

class BibTexStringAdd(DatabaseChange):
    def __init__(self, added_string: BibtexString, database_context: BibDatabaseContext):
        super().__init__(database_context)
        self.added_string = added_string
        self._name = tr("changes.string_added", name=added_string.name)

    def apply_change(self, compound: CompoundCommand) -> None:
        database = self._database_context.database
        if database.has_string_name(self.added_string.name):
            logger.warning("Error: could not add string '%s': a string with that name already exists",
                           self.added_string.name)
            return
        compound.add(AddStringCommand(database, self.added_string.copy()))

    def to_json_pair(self) -> JsonPair:
        return {}, self.added_string.to_dict()


class BibTexStringDelete(DatabaseChange):
    def __init__(self, deleted_string: BibtexString, database_context: BibDatabaseContext):
        super().__init__(database_context)
        self.deleted_string = deleted_string
        self._name = tr("changes.string_deleted", name=deleted_string.name)

    def apply_change(self, compound: CompoundCommand) -> None:
        database = self._database_context.database
        if not database.has_string_name(self.deleted_string.name):
            logger.warning("String '%s' is already gone from the library", self.deleted_string.name)
            return
        compound.add(RemoveStringCommand(database, self.deleted_string.name))

    def to_json_pair(self) -> JsonPair:
        return self.deleted_string.to_dict(), {}


class BibTexStringChange(DatabaseChange):
    def __init__(self, old_string: BibtexString, new_string: BibtexString,
                 database_context: BibDatabaseContext):
        super().__init__(database_context)
        self.old_string = old_string
        self.new_string = new_string
        self._name = tr("changes.string_modified", name=old_string.name)

    def apply_change(self, compound: CompoundCommand) -> None:
        database = self._database_context.database
        if not database.has_string_name(self.old_string.name):
            logger.warning("String '%s' is no longer in the library", self.old_string.name)
            return
        compound.add(ChangeStringContentCommand(database, self.old_string.name, self.new_string.content))

    def to_json_pair(self) -> JsonPair:
        return self.old_string.to_dict(), self.new_string.to_dict()


class BibTexStringRename(DatabaseChange):
    def __init__(self, old_string: BibtexString, new_string: BibtexString,
                 database_context: BibDatabaseContext):
        super().__init__(database_context)
        self.old_string = old_string
        self.new_string = new_string
        self._name = tr("changes.string_renamed", old=old_string.name, new=new_string.name)

    def apply_change(self, compound: CompoundCommand) -> None:
        database = self._database_context.database
        old_name, new_name = self.old_string.name, self.new_string.name
        if old_name.lower() != new_name.lower() and database.has_string_name(new_name):
            logger.warning("Cannot rename string '%s': '%s' already exists", old_name, new_name)
            return
        if not database.has_string_name(old_name):
            logger.warning("String '%s' is no longer in the library", old_name)
            return
        compound.add(RenameStringCommand(database, old_name, new_name))

    def to_json_pair(self) -> JsonPair:
        return self.old_string.to_dict(), self.new_string.to_dict()


# ============================================================================
# Preamble
# ============================================================================

class PreambleChange(DatabaseChange):
    def __init__(self, old_preamble: Optional[str], new_preamble: Optional[str],
                 database_context: BibDatabaseContext):
        super().__init__(database_context)
        self.old_preamble = old_preamble
        self.new_preamble = new_preamble
        self._name = tr("changes.preamble_changed")

    def apply_change(self, compound: CompoundCommand) -> None:
        compound.add(ChangePreambleCommand(self._database_context.database, self.new_preamble))

    def to_json_pair(self) -> JsonPair:
        return {"preamble": self.old_preamble}, {"preamble": self.new_preamble}
