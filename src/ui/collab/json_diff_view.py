"""JSON diff view: a unified diff of a change's before/after snapshots."""

import difflib
import json

from PySide6.QtGui import QFont
from PySide6.QtWidgets import QPlainTextEdit

from src.core.database_changes import DatabaseChange
from src.utils.locale_manager import tr


def json_diff_text(change: DatabaseChange) -> str:
    before, after = change.to_json_pair()
    diff_text = "\n".join(
        difflib.unified_diff(
            json.dumps(before, indent=2, sort_keys=True, ensure_ascii=False).splitlines(),
            json.dumps(after, indent=2, sort_keys=True, ensure_ascii=False).splitlines(),
            fromfile=tr("changes.in_library"),
            tofile=tr("changes.on_disk"),
            lineterm="",
        )
    ).strip()
    return diff_text or tr("changes.no_differences")


class JsonDiffView(QPlainTextEdit):
    def __init__(self, change: DatabaseChange, parent=None):
        super().__init__(parent)
        self.setReadOnly(True)
        self.setFont(QFont("Consolas", 10))
        self.setPlainText(json_diff_text(change))
