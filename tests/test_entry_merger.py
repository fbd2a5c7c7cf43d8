"""Test field-level comparison and merging of two entry versions."""

from src.core.entry_merger import (
    CITATION_KEY_FIELD,
    ENTRY_TYPE_FIELD,
    LEFT,
    RIGHT,
    FieldDiff,
    compare_entries,
    differing_fields,
    merge_entries,
)
from src.models.bib_models import BibEntry


def _pair():
    left = BibEntry("article", "Knuth1984", {
        "author": "Donald E. Knuth",
        "title": "Literate Programming",
        "note": "library only",
    })
    right = BibEntry("article", "Knuth1984", {
        "author": "Donald E. Knuth",
        "title": "Literate programming",
        "pages": "97--111",
    })
    return left, right


def test_compare_entries_order():
    left, right = _pair()
    fields = [diff.field for diff in compare_entries(left, right)]
    assert fields == [ENTRY_TYPE_FIELD, CITATION_KEY_FIELD, "author", "title", "note", "pages"]


def test_differing_fields():
    left, right = _pair()
    assert [diff.field for diff in differing_fields(left, right)] == ["title", "note", "pages"]


def test_identical_treats_missing_and_empty_alike():
    assert FieldDiff("x", None, "").is_identical
    assert not FieldDiff("x", "a", None).is_identical


def test_default_side_prefers_present_right_value():
    assert FieldDiff("x", "a", "b").default_side == RIGHT
    assert FieldDiff("x", "a", None).default_side == LEFT


def test_merge_without_choices():
    left, right = _pair()
    merged = merge_entries(left, right, {})
    assert merged.get_field("title") == "Literate programming"
    assert merged.get_field("pages") == "97--111"
    # dropped on disk but still kept, the right side has no value for it
    assert merged.get_field("note") == "library only"
    assert merged is not left and merged is not right


def test_merge_honors_choices():
    left, right = _pair()
    merged = merge_entries(left, right, {"title": LEFT, "note": RIGHT, "pages": LEFT})
    assert merged.get_field("title") == "Literate Programming"
    assert not merged.has_field("note")
    assert not merged.has_field("pages")
    assert merged.get_field("author") == "Donald E. Knuth"


def test_merge_entry_type_and_key():
    left = BibEntry("article", "old-key", {"title": "T"})
    right = BibEntry("inproceedings", "new-key", {"title": "T"})

    merged = merge_entries(left, right, {ENTRY_TYPE_FIELD: LEFT})
    assert merged.entry_type == "article"
    assert merged.citation_key == "new-key"

    merged = merge_entries(left, right, {CITATION_KEY_FIELD: LEFT})
    assert merged.entry_type == "inproceedings"
    assert merged.citation_key == "old-key"
