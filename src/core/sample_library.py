"""
Sample Library
A small library plus a set of external changes covering every change type,
used by the demo entry point.
"""

from typing import List, Tuple

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
from src.models.bib_models import BibDatabase, BibDatabaseContext, BibEntry, BibtexString


def build_sample_library() -> BibDatabaseContext:
    database = BibDatabase(
        entries=[
            BibEntry("article", "Knuth1984", {
                "author": "Donald E. Knuth",
                "title": "Literate Programming",
                "journal": "cj",
                "year": "1984",
            }),
            BibEntry("book", "Lamport1994", {
                "author": "Leslie Lamport",
                "title": "LaTeX: A Document Preparation System",
                "publisher": "Addison-Wesley",
                "year": "1994",
            }),
            BibEntry("inproceedings", "Dijkstra1968", {
                "author": "Edsger W. Dijkstra",
                "title": "Go To Statement Considered Harmful",
                "year": "1968",
            }),
        ],
        strings=[
            BibtexString("cj", "The Computer Journal"),
            BibtexString("acm", "Association for Computing Machinery"),
            BibtexString("ieee", "IEEE"),
        ],
        preamble="\\newcommand{\\noopsort}[1]{}",
    )
    return BibDatabaseContext(database)


def build_sample_changes(
    database_context: BibDatabaseContext,
    dialog_service=None,
) -> List[DatabaseChange]:
    """Changes as if the library file had been edited by another program."""
    database = database_context.database

    knuth = database.get_entry_by_citation_key("Knuth1984")
    knuth_on_disk = knuth.copy()
    knuth_on_disk.set_field("pages", "97--111")
    knuth_on_disk.set_field("doi", "10.1093/comjnl/27.2.97")
    knuth_on_disk.set_field("title", "Literate programming")

    added = BibEntry("article", "Turing1950", {
        "author": "Alan M. Turing",
        "title": "Computing Machinery and Intelligence",
        "journal": "Mind",
        "year": "1950",
    })

    changes: List[DatabaseChange] = [
        EntryChange(knuth, knuth_on_disk, database_context, dialog_service),
        EntryAdd(added, database_context),
        EntryDelete(database.get_entry_by_citation_key("Dijkstra1968"), database_context),
        BibTexStringAdd(BibtexString("mit", "MIT Press"), database_context),
        BibTexStringChange(database.get_string("acm").copy(),
                           BibtexString("acm", "ACM"), database_context),
        BibTexStringRename(database.get_string("ieee").copy(),
                           BibtexString("ieeexplore", "IEEE"), database_context),
        BibTexStringDelete(database.get_string("cj"), database_context),
        PreambleChange(database.preamble, "\\newcommand{\\noopsort}[1]{#1}", database_context),
    ]
    return changes


def build_sample(dialog_service=None) -> Tuple[BibDatabaseContext, List[DatabaseChange]]:
    context = build_sample_library()
    return context, build_sample_changes(context, dialog_service)
