"""
Bibliography Data Models
Defines entries, @string definitions and the in-memory library they live in.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List, Dict, Any

from src.core.errors import EntryNotFoundError, KeyCollisionError, StringNotFoundError


@dataclass(eq=False)
class BibEntry:
    """A single bibliography entry (e.g., one @article).

    Entries compare by identity: two entries holding the same fields are still
    two different entries of the library.
    """
    entry_type: str = "misc"
    citation_key: Optional[str] = None
    fields: Dict[str, str] = field(default_factory=dict)

    def get_field(self, name: str) -> Optional[str]:
        return self.fields.get(name.lower())

    def set_field(self, name: str, value: Optional[str]) -> None:
        """Set a field value; an empty value clears the field."""
        if not value:
            self.clear_field(name)
            return
        self.fields[name.lower()] = value

    def clear_field(self, name: str) -> None:
        self.fields.pop(name.lower(), None)

    def has_field(self, name: str) -> bool:
        return name.lower() in self.fields

    @property
    def field_names(self) -> List[str]:
        return list(self.fields.keys())

    @property
    def display_key(self) -> str:
        """Citation key, or a placeholder for entries without one."""
        return self.citation_key or "<no key>"

    def copy(self) -> "BibEntry":
        return BibEntry(self.entry_type, self.citation_key, dict(self.fields))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.entry_type,
            "citationKey": self.citation_key,
            "fields": dict(self.fields),
        }


@dataclass(eq=False)
class BibtexString:
    """A @string definition (abbreviation usable inside field values)."""
    name: str
    content: str = ""

    def copy(self) -> "BibtexString":
        return BibtexString(self.name, self.content)

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "content": self.content}


class BibDatabase:
    """
    In-memory bibliography database.

    Features:
    - Ordered entries, looked up by identity or citation key
    - @string definitions keyed by name (names are unique)
    - Optional preamble
    """

    def __init__(
        self,
        entries: Optional[List[BibEntry]] = None,
        strings: Optional[List[BibtexString]] = None,
        preamble: Optional[str] = None,
    ):
        self._entries: List[BibEntry] = list(entries or [])
        self._strings: Dict[str, BibtexString] = {}
        self._preamble = preamble
        for string in strings or []:
            self.add_string(string)

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------
    @property
    def entries(self) -> List[BibEntry]:
        return list(self._entries)

    @property
    def entry_count(self) -> int:
        return len(self._entries)

    def index_of(self, entry: BibEntry) -> int:
        for idx, candidate in enumerate(self._entries):
            if candidate is entry:
                return idx
        return -1

    def has_entry(self, entry: BibEntry) -> bool:
        return self.index_of(entry) >= 0

    def insert_entry(self, entry: BibEntry, index: Optional[int] = None) -> None:
        if index is None or index < 0 or index > len(self._entries):
            self._entries.append(entry)
        else:
            self._entries.insert(index, entry)

    def remove_entry(self, entry: BibEntry) -> int:
        """Remove an entry and return the position it occupied."""
        idx = self.index_of(entry)
        if idx < 0:
            raise EntryNotFoundError(entry.display_key)
        del self._entries[idx]
        return idx

    def get_entry_by_citation_key(self, citation_key: str) -> Optional[BibEntry]:
        for entry in self._entries:
            if entry.citation_key == citation_key:
                return entry
        return None

    # ------------------------------------------------------------------
    # @string definitions
    # ------------------------------------------------------------------
    @property
    def strings(self) -> List[BibtexString]:
        return list(self._strings.values())

    def has_string_name(self, name: str) -> bool:
        return name.lower() in self._strings

    def get_string(self, name: str) -> Optional[BibtexString]:
        return self._strings.get(name.lower())

    def add_string(self, string: BibtexString) -> None:
        if self.has_string_name(string.name):
            raise KeyCollisionError(string.name)
        self._strings[string.name.lower()] = string

    def remove_string(self, name: str) -> BibtexString:
        try:
            return self._strings.pop(name.lower())
        except KeyError:
            raise StringNotFoundError(name) from None

    def rename_string(self, old_name: str, new_name: str) -> None:
        if old_name.lower() != new_name.lower() and self.has_string_name(new_name):
            raise KeyCollisionError(new_name)
        string = self.remove_string(old_name)
        string.name = new_name
        self._strings[new_name.lower()] = string

    def resolve_string_reference(self, value: Optional[str]) -> Optional[str]:
        """Return the @string content when ``value`` is a bare string name."""
        if not value:
            return value
        string = self.get_string(value.strip())
        return string.content if string else value

    # ------------------------------------------------------------------
    # Preamble
    # ------------------------------------------------------------------
    @property
    def preamble(self) -> Optional[str]:
        return self._preamble

    def set_preamble(self, preamble: Optional[str]) -> None:
        self._preamble = preamble or None


class BibDatabaseContext:
    """A database together with the file it was loaded from."""

    def __init__(self, database: Optional[BibDatabase] = None, path: Optional[Path] = None):
        self.database = database if database is not None else BibDatabase()
        self.path = Path(path) if path else None
        # Raised once merged external changes have to be written back
        self.changed = False

    @property
    def display_name(self) -> str:
        return self.path.name if self.path else "untitled"
