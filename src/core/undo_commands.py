"""
Undo Commands
QUndoCommand subclasses that mutate a BibDatabase.

Commands validate their preconditions on construction, so a command that made
it onto the undo stack can always be redone and undone.
"""

from typing import List, Optional

from PySide6.QtGui import QUndoCommand

from src.core.errors import EntryNotFoundError, KeyCollisionError, StringNotFoundError
from src.models.bib_models import BibDatabase, BibEntry, BibtexString
from src.utils.locale_manager import tr


class CompoundCommand(QUndoCommand):
    """
    One undo step made of several commands.

    Children are kept on the Python side and run as soon as they are added,
    so a command built later validates against the effect of earlier ones.
    The first ``redo()`` (issued by ``QUndoStack.push``) is therefore a no-op.
    """

    def __init__(self, text: str):
        super().__init__(text)
        self._children: List[QUndoCommand] = []
        self._applied = False

    def add(self, command: QUndoCommand) -> None:
        command.redo()
        self._children.append(command)
        self._applied = True

    def child_count(self) -> int:
        return len(self._children)

    def redo(self) -> None:
        if self._applied:
            return
        for command in self._children:
            command.redo()
        self._applied = True

    def undo(self) -> None:
        for command in reversed(self._children):
            command.undo()
        self._applied = False


class InsertEntryCommand(QUndoCommand):
    """Insert an entry at the end of the database (or at a given position)."""

    def __init__(self, database: BibDatabase, entry: BibEntry, index: Optional[int] = None):
        super().__init__(tr("undo.insert_entry", key=entry.display_key))
        self._database = database
        self._entry = entry
        self._index = index

    def redo(self) -> None:
        self._database.insert_entry(self._entry, self._index)

    def undo(self) -> None:
        self._database.remove_entry(self._entry)


class RemoveEntryCommand(QUndoCommand):
    """Remove an entry, remembering its position for undo."""

    def __init__(self, database: BibDatabase, entry: BibEntry):
        super().__init__(tr("undo.remove_entry", key=entry.display_key))
        if not database.has_entry(entry):
            raise EntryNotFoundError(entry.display_key)
        self._database = database
        self._entry = entry
        self._index = database.index_of(entry)

    def redo(self) -> None:
        self._index = self._database.remove_entry(self._entry)

    def undo(self) -> None:
        self._database.insert_entry(self._entry, self._index)


class ReplaceEntryCommand(QUndoCommand):
    """Swap an entry for another one at the same position."""

    def __init__(self, database: BibDatabase, old_entry: BibEntry, new_entry: BibEntry):
        super().__init__(tr("undo.replace_entry", key=old_entry.display_key))
        if not database.has_entry(old_entry):
            raise EntryNotFoundError(old_entry.display_key)
        self._database = database
        self._old_entry = old_entry
        self._new_entry = new_entry

    def redo(self) -> None:
        idx = self._database.remove_entry(self._old_entry)
        self._database.insert_entry(self._new_entry, idx)

    def undo(self) -> None:
        idx = self._database.remove_entry(self._new_entry)
        self._database.insert_entry(self._old_entry, idx)


class AddStringCommand(QUndoCommand):
    def __init__(self, database: BibDatabase, string: BibtexString):
        super().__init__(tr("undo.add_string", name=string.name))
        if database.has_string_name(string.name):
            raise KeyCollisionError(string.name)
        self._database = database
        self._string = string

    def redo(self) -> None:
        self._database.add_string(self._string)

    def undo(self) -> None:
        self._database.remove_string(self._string.name)


class RemoveStringCommand(QUndoCommand):
    def __init__(self, database: BibDatabase, name: str):
        super().__init__(tr("undo.remove_string", name=name))
        string = database.get_string(name)
        if string is None:
            raise StringNotFoundError(name)
        self._database = database
        self._string = string

    def redo(self) -> None:
        self._database.remove_string(self._string.name)

    def undo(self) -> None:
        self._database.add_string(self._string)


class ChangeStringContentCommand(QUndoCommand):
    def __init__(self, database: BibDatabase, name: str, new_content: str):
        super().__init__(tr("undo.change_string", name=name))
        string = database.get_string(name)
        if string is None:
            raise StringNotFoundError(name)
        self._string = string
        self._old_content = string.content
        self._new_content = new_content

    def redo(self) -> None:
        self._string.content = self._new_content

    def undo(self) -> None:
        self._string.content = self._old_content


class RenameStringCommand(QUndoCommand):
    def __init__(self, database: BibDatabase, old_name: str, new_name: str):
        super().__init__(tr("undo.rename_string", old=old_name, new=new_name))
        if database.get_string(old_name) is None:
            raise StringNotFoundError(old_name)
        if old_name.lower() != new_name.lower() and database.has_string_name(new_name):
            raise KeyCollisionError(new_name)
        self._database = database
        self._old_name = old_name
        self._new_name = new_name

    def redo(self) -> None:
        self._database.rename_string(self._old_name, self._new_name)

    def undo(self) -> None:
        self._database.rename_string(self._new_name, self._old_name)


class ChangePreambleCommand(QUndoCommand):
    def __init__(self, database: BibDatabase, new_preamble: Optional[str]):
        super().__init__(tr("undo.change_preamble"))
        self._database = database
        self._old_preamble = database.preamble
        self._new_preamble = new_preamble

    def redo(self) -> None:
        self._database.set_preamble(self._new_preamble)

    def undo(self) -> None:
        self._database.set_preamble(self._old_preamble)
