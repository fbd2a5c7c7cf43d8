"""Shared pytest fixtures: headless Qt, isolated settings, sample library."""

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Must be set before the first QApplication is created
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ["REFKEEPER_ENV"] = "test"
os.environ.setdefault("REFKEEPER_DATA_DIR", tempfile.mkdtemp(prefix="refkeeper-tests-"))

from PySide6.QtGui import QUndoStack
from PySide6.QtWidgets import QApplication

from src.core.sample_library import build_sample
from src.core.settings_manager import AppSettings


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def preferences():
    return AppSettings()


@pytest.fixture
def undo_stack():
    return QUndoStack()


@pytest.fixture
def sample():
    """(database_context, changes) for the built-in sample library."""
    return build_sample()


class ScriptedDialogService:
    """Stands in for DialogService: runs ``script(dialog)`` instead of ``exec()``."""

    def __init__(self, script=None):
        self.script = script
        self.shown = []

    @property
    def parent(self):
        return None

    def show_custom_dialog_and_wait(self, dialog):
        self.shown.append(dialog)
        if self.script is not None:
            self.script(dialog)
        get_result = getattr(dialog, "get_result", None)
        return get_result() if callable(get_result) else dialog.result()

    def notify(self, message, title=None):
        self.shown.append(message)


@pytest.fixture
def scripted_dialog_service():
    return ScriptedDialogService
