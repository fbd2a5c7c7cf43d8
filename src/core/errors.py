"""
Library Errors
Exceptions raised by the bibliography model and the undo commands built on it.
"""


class BibDatabaseError(Exception):
    """Base class for errors raised while mutating a bibliography database."""


class KeyCollisionError(BibDatabaseError):
    """A @string with the same name already exists in the database."""

    def __init__(self, name: str):
        super().__init__(f"A string named '{name}' already exists")
        self.name = name


class EntryNotFoundError(BibDatabaseError):
    """The entry is not part of the database (compared by identity)."""

    def __init__(self, citation_key: str = ""):
        super().__init__(f"Entry '{citation_key}' is not part of the database")
        self.citation_key = citation_key


class StringNotFoundError(BibDatabaseError):
    """No @string with the given name exists in the database."""

    def __init__(self, name: str):
        super().__init__(f"No string named '{name}' in the database")
        self.name = name
