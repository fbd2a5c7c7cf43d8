"""Test resolve_external_changes with a scripted dialog service."""

from PySide6.QtGui import QUndoStack

from src.core.external_changes import resolve_external_changes


def _accept_all(dialog):
    for _ in dialog.view_model.visible_changes:
        dialog.accept_changes()


def _deny_all(dialog):
    for _ in dialog.view_model.visible_changes:
        dialog.deny_changes()


def test_no_changes_shows_nothing(sample, scripted_dialog_service):
    context, _ = sample
    service = scripted_dialog_service(_accept_all)

    assert resolve_external_changes([], context, service, "title") is False
    assert service.shown == []
    assert context.changed is False


def test_accepting_marks_library_changed(qapp, sample, preferences, scripted_dialog_service):
    context, changes = sample
    stack = QUndoStack()
    service = scripted_dialog_service(_accept_all)

    resolved = resolve_external_changes(changes, context, service, "title",
                                        undo_stack=stack, preferences=preferences)

    assert resolved is True
    assert context.changed is True
    assert stack.count() == 1
    assert service.shown[0].windowTitle() == "title"


def test_denying_everything_keeps_library_clean(qapp, sample, preferences, scripted_dialog_service):
    context, changes = sample
    stack = QUndoStack()
    service = scripted_dialog_service(_deny_all)

    resolved = resolve_external_changes(changes, context, service, "title",
                                        undo_stack=stack, preferences=preferences)

    assert resolved is True
    assert context.changed is False
    assert stack.count() == 0


def test_closing_early_reports_unresolved(qapp, sample, preferences, scripted_dialog_service):
    context, changes = sample

    def accept_one_and_close(dialog):
        dialog.accept_changes()
        dialog.reject()

    service = scripted_dialog_service(accept_one_and_close)
    resolved = resolve_external_changes(changes, context, service, "title", preferences=preferences)

    assert resolved is False
    assert context.changed is False
