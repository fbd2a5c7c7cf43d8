"""Entry Merger

Field-level comparison of two versions of the same entry, and construction of
a merged entry from per-field choices. Used by the merge dialog that resolves
a modified entry by hand.

The entry type and the citation key take part in the comparison as the
pseudo-fields ``ENTRY_TYPE_FIELD`` and ``CITATION_KEY_FIELD``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from src.models.bib_models import BibEntry

LEFT = "left"
RIGHT = "right"

ENTRY_TYPE_FIELD = "entrytype"
CITATION_KEY_FIELD = "citationkey"


@dataclass(frozen=True)
class FieldDiff:
    """One row of a side-by-side comparison."""

    field: str
    left: Optional[str]
    right: Optional[str]

    @property
    def is_identical(self) -> bool:
        return (self.left or None) == (self.right or None)

    def value_for(self, side: str) -> Optional[str]:
        return self.left if side == LEFT else self.right

    @property
    def default_side(self) -> str:
        # Prefer the incoming version unless it dropped the value
        return RIGHT if self.right else LEFT


def _value(entry: BibEntry, field: str) -> Optional[str]:
    if field == ENTRY_TYPE_FIELD:
        return entry.entry_type
    if field == CITATION_KEY_FIELD:
        return entry.citation_key
    return entry.get_field(field)


def compare_entries(left: BibEntry, right: BibEntry) -> list[FieldDiff]:
    """Compare two entries over the union of their fields.

    Order: entry type, citation key, then the left entry's fields in their
    order, then fields only the right entry has.
    """
    names = [ENTRY_TYPE_FIELD, CITATION_KEY_FIELD]
    for name in list(left.field_names) + list(right.field_names):
        if name not in names:
            names.append(name)
    return [FieldDiff(name, _value(left, name), _value(right, name)) for name in names]


def differing_fields(left: BibEntry, right: BibEntry) -> list[FieldDiff]:
    return [diff for diff in compare_entries(left, right) if not diff.is_identical]


def merge_entries(left: BibEntry, right: BibEntry, choices: Mapping[str, str]) -> BibEntry:
    """Build a new entry taking each field from the side named in ``choices``.

    Fields without a choice come from the right entry when it has a value and
    from the left one otherwise. A field missing on the chosen side is left
    out of the result.
    """
    merged = BibEntry(entry_type=right.entry_type)
    for diff in compare_entries(left, right):
        side = choices.get(diff.field, diff.default_side)
        value = diff.value_for(side)
        if diff.field == ENTRY_TYPE_FIELD:
            merged.entry_type = value or left.entry_type
        elif diff.field == CITATION_KEY_FIELD:
            merged.citation_key = value or None
        else:
            merged.set_field(diff.field, value)
    return merged
