"""Test the external changes dialog with a sample library, without exec()."""

from collections import Counter

import pytest
from PySide6.QtGui import QUndoStack
from PySide6.QtWidgets import QDialog

from src.core.database_changes import BibTexStringAdd, EntryChange, PreambleChange
from src.core.entry_merger import LEFT
from src.ui.collab.details_view_factory import DatabaseChangeDetailsViewFactory
from src.ui.dialogs.changes_resolver_dialog import DatabaseChangesResolverDialog


@pytest.fixture
def make_dialog(qapp, preferences):
    created = []

    def factory(changes, context, undo_stack=None):
        dialog = DatabaseChangesResolverDialog(
            changes, context, "External changes",
            undo_stack=undo_stack if undo_stack is not None else QUndoStack(),
            preferences=preferences,
        )
        created.append(dialog)
        return dialog

    yield factory
    for dialog in created:
        dialog.deleteLater()


def test_table_lists_changes_and_selects_first(sample, make_dialog):
    context, changes = sample
    dialog = make_dialog(changes, context)

    assert dialog.changes_table.rowCount() == len(changes)
    assert dialog.changes_table.item(0, 0).text() == changes[0].name
    assert dialog.view_model.selected_change is changes[0]


def test_details_view_built_once_per_change(sample, make_dialog, monkeypatch):
    context, changes = sample
    calls = Counter()
    original_create = DatabaseChangeDetailsViewFactory.create

    def counting_create(self, change):
        calls[id(change)] += 1
        return original_create(self, change)

    monkeypatch.setattr(DatabaseChangeDetailsViewFactory, "create", counting_create)
    dialog = make_dialog(changes, context)

    for row in (1, 2, 0, 1, 2, 0):
        dialog.changes_table.selectRow(row)

    assert set(calls) == {id(changes[0]), id(changes[1]), id(changes[2])}
    assert all(count == 1 for count in calls.values())


def test_selected_change_is_shown_in_tabs(sample, make_dialog):
    context, changes = sample
    dialog = make_dialog(changes, context)

    dialog.changes_table.selectRow(1)
    dialog.changes_table.selectRow(0)

    tabs = dialog._change_info_widget
    assert tabs.count() == 2
    assert tabs.widget(0) is dialog._details_view_cache[changes[0]]


def test_accepting_everything_closes_dialog(sample, make_dialog):
    context, changes = sample
    stack = QUndoStack()
    dialog = make_dialog(changes, context, stack)

    for _ in changes:
        dialog.accept_changes()

    assert dialog.result() == QDialog.Accepted
    assert dialog.get_result() is True
    assert dialog.are_all_changes_accepted()
    assert not dialog.are_all_changes_denied()
    assert stack.count() == 1
    assert dialog.changes_table.rowCount() == 0


def test_denying_everything_closes_dialog(sample, make_dialog):
    context, changes = sample
    stack = QUndoStack()
    dialog = make_dialog(changes, context, stack)

    for _ in changes:
        dialog.deny_changes()

    assert dialog.get_result() is True
    assert dialog.are_all_changes_denied()
    assert not dialog.are_all_changes_accepted()
    assert stack.count() == 0


def test_closing_early_is_not_resolved(sample, make_dialog):
    context, changes = sample
    dialog = make_dialog(changes, context)

    dialog.accept_changes()
    dialog.reject()

    assert dialog.result() == QDialog.Rejected
    assert dialog.get_result() is False
    assert not dialog.are_all_changes_accepted()
    assert not dialog.are_all_changes_denied()


def test_next_change_is_selected_after_decision(sample, make_dialog):
    context, changes = sample
    dialog = make_dialog(changes, context)

    dialog.changes_table.selectRow(2)
    dialog.deny_changes()

    assert dialog.view_model.selected_change is changes[3]
    assert dialog.changes_table.rowCount() == len(changes) - 1


def test_merge_button_follows_resolver(sample, make_dialog):
    context, changes = sample
    dialog = make_dialog(changes, context)

    assert isinstance(changes[0], EntryChange)
    assert dialog.ask_user_to_resolve_change_button.isEnabled()
    dialog.changes_table.selectRow(1)
    assert not dialog.ask_user_to_resolve_change_button.isEnabled()


def test_ask_to_resolve_without_resolver_is_noop(sample, make_dialog):
    context, _ = sample
    changes = [
        PreambleChange(None, "x", context),
        BibTexStringAdd(context.database.strings[0].copy(), context),
    ]
    dialog = make_dialog(changes, context)

    dialog.ask_user_to_resolve_change()

    assert dialog.view_model.visible_changes == changes
    assert not any(change.accepted for change in changes)


def test_manual_merge_through_dialog_service(sample, make_dialog, scripted_dialog_service):
    context, _ = sample
    knuth = context.database.get_entry_by_citation_key("Knuth1984")
    on_disk = knuth.copy()
    on_disk.set_field("title", "Literate programming")
    on_disk.set_field("pages", "97--111")

    def keep_library_title(merge_dialog):
        merge_dialog.choose("title", LEFT)
        merge_dialog.accept()

    service = scripted_dialog_service(keep_library_title)
    change = EntryChange(knuth, on_disk, context, service)
    stack = QUndoStack()
    dialog = make_dialog([change], context, stack)

    dialog.ask_user_to_resolve_change()

    assert len(service.shown) == 1
    assert dialog.get_result() is True
    assert dialog.are_all_changes_accepted()
    merged = context.database.entries[0]
    assert merged is not knuth and merged is not on_disk
    assert merged.get_field("title") == "Literate Programming"
    assert merged.get_field("pages") == "97--111"
    assert stack.count() == 1


def test_cancelled_merge_keeps_change_open(sample, make_dialog, scripted_dialog_service):
    context, _ = sample
    knuth = context.database.get_entry_by_citation_key("Knuth1984")
    service = scripted_dialog_service(lambda merge_dialog: merge_dialog.reject())
    change = EntryChange(knuth, knuth.copy(), context, service)
    dialog = make_dialog([change], context)

    dialog.ask_user_to_resolve_change()

    assert dialog.view_model.visible_changes == [change]
    assert not change.accepted
    assert dialog.get_result() is False
