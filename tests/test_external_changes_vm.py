"""Test the resolution state kept by ExternalChangesResolverViewModel."""

import gc

import pytest
from PySide6.QtGui import QUndoStack

from src.core.database_changes import (
    BibTexStringAdd,
    BibTexStringChange,
    BibTexStringRename,
    EntryAdd,
    EntryChange,
    PreambleChange,
)
from src.models.bib_models import BibtexString
from src.viewmodels.external_changes_resolver_vm import ExternalChangesResolverViewModel


def _decide_all(vm, accept=True):
    for change in vm.visible_changes:
        vm.selected_change = change
        if accept:
            vm.accept_change()
        else:
            vm.deny_change()


def _snapshot(context):
    database = context.database
    return (
        list(database.entries),
        sorted((s.name, s.content) for s in database.strings),
        database.preamble,
    )


def test_initial_state(sample):
    context, changes = sample
    vm = ExternalChangesResolverViewModel(changes, QUndoStack())
    assert vm.visible_changes == changes
    assert vm.changes == changes
    assert vm.selected_change is None
    assert not vm.are_all_changes_resolved()
    assert not vm.can_ask_user_to_resolve_change


def test_empty_list_is_resolved_without_signal():
    stack = QUndoStack()
    vm = ExternalChangesResolverViewModel([], stack)
    emitted = []
    vm.all_changes_resolved_changed.connect(emitted.append)

    assert vm.are_all_changes_resolved()
    assert vm.are_all_changes_accepted()
    assert vm.are_all_changes_denied()
    assert emitted == []
    assert stack.count() == 0


def test_accept_all_applies_one_undoable_step(sample):
    context, changes = sample
    before = _snapshot(context)
    stack = QUndoStack()
    vm = ExternalChangesResolverViewModel(changes, stack)

    _decide_all(vm, accept=True)

    assert vm.are_all_changes_resolved()
    assert vm.are_all_changes_accepted()
    assert not vm.are_all_changes_denied()
    assert stack.count() == 1

    database = context.database
    assert [e.citation_key for e in database.entries] == ["Knuth1984", "Lamport1994", "Turing1950"]
    assert database.get_entry_by_citation_key("Knuth1984").get_field("pages") == "97--111"
    assert sorted(s.name for s in database.strings) == ["acm", "ieeexplore", "mit"]
    assert database.get_string("acm").content == "ACM"
    assert database.preamble == "\\newcommand{\\noopsort}[1]{#1}"

    stack.undo()
    assert _snapshot(context) == before


def test_deny_all_leaves_database_untouched(sample):
    context, changes = sample
    before = _snapshot(context)
    stack = QUndoStack()
    vm = ExternalChangesResolverViewModel(changes, stack)

    _decide_all(vm, accept=False)

    assert vm.are_all_changes_resolved()
    assert vm.are_all_changes_denied()
    assert not vm.are_all_changes_accepted()
    assert stack.count() == 0
    assert _snapshot(context) == before


def test_only_accepted_changes_are_applied(sample):
    context, changes = sample
    stack = QUndoStack()
    vm = ExternalChangesResolverViewModel(changes, stack)

    for change in vm.visible_changes:
        vm.selected_change = change
        if isinstance(change, PreambleChange):
            vm.accept_change()
        else:
            vm.deny_change()

    assert not vm.are_all_changes_accepted()
    assert not vm.are_all_changes_denied()
    assert context.database.preamble == "\\newcommand{\\noopsort}[1]{#1}"
    assert context.database.get_entry_by_citation_key("Turing1950") is None


def test_resolution_signal_follows_apply(sample):
    _, changes = sample
    stack = QUndoStack()
    vm = ExternalChangesResolverViewModel(changes, stack)
    seen = []
    vm.all_changes_resolved_changed.connect(lambda resolved: seen.append((resolved, stack.count())))

    _decide_all(vm, accept=True)

    assert seen == [(True, 1)]


def test_visible_changes_signal_per_decision(sample):
    _, changes = sample
    vm = ExternalChangesResolverViewModel(changes, QUndoStack())
    counter = []
    vm.visible_changes_changed.connect(lambda: counter.append(1))

    vm.selected_change = changes[0]
    vm.deny_change()
    assert len(counter) == 1
    assert changes[0] not in vm.visible_changes
    assert len(vm.changes) == len(changes)


def test_actions_without_selection_do_nothing(sample):
    _, changes = sample
    vm = ExternalChangesResolverViewModel(changes, QUndoStack())
    vm.accept_change()
    vm.deny_change()
    vm.accept_merged_change(changes[0])
    assert vm.visible_changes == changes
    assert not any(change.accepted for change in changes)


def test_can_ask_follows_selection(sample):
    _, changes = sample
    vm = ExternalChangesResolverViewModel(changes, QUndoStack())
    seen = []
    vm.can_ask_user_to_resolve_change_changed.connect(seen.append)

    entry_change = next(c for c in changes if isinstance(c, EntryChange))
    entry_add = next(c for c in changes if isinstance(c, EntryAdd))

    vm.selected_change = entry_change
    assert vm.can_ask_user_to_resolve_change
    vm.selected_change = entry_add
    assert not vm.can_ask_user_to_resolve_change
    assert seen == [True, False]


def test_selected_change_signal(sample):
    _, changes = sample
    vm = ExternalChangesResolverViewModel(changes, QUndoStack())
    seen = []
    vm.selected_change_changed.connect(seen.append)

    vm.selected_change = changes[1]
    vm.selected_change = changes[1]
    vm.selected_change = None
    assert seen == [changes[1], None]


def test_accept_merged_change_replaces_original(sample):
    context, changes = sample
    stack = QUndoStack()
    vm = ExternalChangesResolverViewModel(changes, stack)
    original = next(c for c in changes if isinstance(c, EntryChange))

    merged_entry = original.new_entry.copy()
    merged_entry.set_field("title", original.old_entry.get_field("title"))
    merged = EntryChange(original.old_entry, merged_entry, context)

    vm.selected_change = original
    vm.accept_merged_change(merged)

    assert merged in vm.changes
    assert original not in vm.changes
    assert original not in vm.visible_changes
    assert merged.accepted
    assert not original.accepted

    for change in vm.visible_changes:
        vm.selected_change = change
        vm.deny_change()
    assert context.database.entries[0] is merged_entry
    assert context.database.entries[0].get_field("title") == "Literate Programming"


def test_accept_merged_change_rejects_none(sample):
    _, changes = sample
    vm = ExternalChangesResolverViewModel(changes, QUndoStack())
    vm.selected_change = changes[0]
    with pytest.raises(ValueError):
        vm.accept_merged_change(None)


def test_accept_one_change_then_undo_and_redo(sample):
    context, changes = sample
    before = _snapshot(context)
    stack = QUndoStack()
    string_add = next(c for c in changes if isinstance(c, BibTexStringAdd))
    vm = ExternalChangesResolverViewModel([string_add], stack)

    vm.selected_change = string_add
    vm.accept_change()
    gc.collect()

    assert stack.count() == 1
    assert context.database.get_string("mit").content == "MIT Press"
    stack.undo()
    assert _snapshot(context) == before
    stack.redo()
    assert context.database.get_string("mit").content == "MIT Press"


def test_rename_then_add_of_freed_name_in_one_batch(sample):
    context, _ = sample
    database = context.database
    acm = database.get_string("acm")
    before = _snapshot(context)
    changes = [
        BibTexStringRename(acm.copy(), BibtexString("acmpress", acm.content), context),
        BibTexStringAdd(BibtexString("acm", "ACM Press"), context),
    ]
    stack = QUndoStack()
    vm = ExternalChangesResolverViewModel(changes, stack)

    _decide_all(vm, accept=True)

    assert stack.count() == 1
    assert database.get_string("acmpress") is acm
    assert database.get_string("acm").content == "ACM Press"
    stack.undo()
    assert _snapshot(context) == before
    assert database.get_string("acm") is acm


def test_case_only_string_rename_is_applied(sample):
    context, _ = sample
    ieee = context.database.get_string("ieee")
    rename = BibTexStringRename(ieee.copy(), BibtexString("IEEE", ieee.content), context)
    stack = QUndoStack()
    vm = ExternalChangesResolverViewModel([rename], stack)

    _decide_all(vm, accept=True)

    assert stack.count() == 1
    assert context.database.get_string("ieee").name == "IEEE"
    stack.undo()
    assert context.database.get_string("ieee").name == "ieee"


def test_string_change_snapshots_survive_apply(sample):
    context, changes = sample
    string_change = next(c for c in changes if isinstance(c, BibTexStringChange))
    string_rename = next(c for c in changes if isinstance(c, BibTexStringRename))
    change_before = string_change.to_json_pair()
    rename_before = string_rename.to_json_pair()

    _decide_all(ExternalChangesResolverViewModel(changes, QUndoStack()), accept=True)

    assert context.database.get_string("acm").content == "ACM"
    assert string_change.to_json_pair() == change_before
    assert string_rename.to_json_pair() == rename_before
    assert string_change.old_string.content != "ACM"
    assert string_rename.old_string.name == "ieee"
