"""
Change Details Views
Read-only widgets describing one external change, shown in the "Details" tab
of the external changes dialog.
"""

import html
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QFormLayout,
    QHeaderView,
    QLabel,
    QPlainTextEdit,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from src.core.database_changes import EntryChange, PreambleChange
from src.core.entry_merger import compare_entries
from src.models.bib_models import BibEntry, BibtexString
from src.ui.components.table import ReusableTable, TableColumn
from src.ui.preview_viewer import PreviewViewer
from src.ui.theme_manager import ThemeManager
from src.utils.locale_manager import tr


class DatabaseChangeDetailsView(QWidget):
    """Base class: a vertical layout with a header label."""

    def __init__(self, header: str, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(8, 8, 8, 8)
        self._layout.setSpacing(8)

        self.header_label = QLabel(f"<h3>{html.escape(header, quote=False)}</h3>")
        self.header_label.setWordWrap(True)
        self._layout.addWidget(self.header_label)


class EntryWithPreviewDetailsView(DatabaseChangeDetailsView):
    """An added or deleted entry: a short explanation and the entry preview."""

    def __init__(self, header: str, description: str, entry: BibEntry,
                 preview_viewer: PreviewViewer, parent: Optional[QWidget] = None):
        super().__init__(header, parent)
        self.entry = entry

        info = QLabel(description)
        info.setStyleSheet("color: gray; font-size: 11px;")
        info.setWordWrap(True)
        self._layout.addWidget(info)

        self.preview = preview_viewer.create_widget(entry)
        self._layout.addWidget(self.preview, stretch=1)


class EntryChangeDetailsView(DatabaseChangeDetailsView):
    """A modified entry: both versions side by side, then the changed fields."""

    def __init__(self, change: EntryChange, preview_viewer: PreviewViewer,
                 parent: Optional[QWidget] = None):
        super().__init__(change.name, parent)
        self.change = change

        splitter = QSplitter(Qt.Horizontal)
        splitter.addWidget(self._titled(tr("changes.in_library"), preview_viewer.create_widget(change.old_entry)))
        splitter.addWidget(self._titled(tr("changes.on_disk"), preview_viewer.create_widget(change.new_entry)))
        splitter.setSizes([400, 400])
        self._layout.addWidget(splitter, stretch=2)

        self.fields_table = ReusableTable([
            TableColumn("field", tr("changes.field"), QHeaderView.ResizeToContents),
            TableColumn("left", tr("changes.in_library"), QHeaderView.Stretch),
            TableColumn("right", tr("changes.on_disk"), QHeaderView.Stretch),
        ])
        colors = ThemeManager.get_current_theme().colors
        rows = []
        for diff in compare_entries(change.old_entry, change.new_entry):
            if diff.is_identical:
                continue
            rows.append({
                "field": diff.field,
                "left": {"text": diff.left or "", "tooltip": diff.left, "color": colors.removed},
                "right": {"text": diff.right or "", "tooltip": diff.right, "color": colors.added},
                "_diff": diff,
            })
        self.fields_table.set_data(rows)
        self._layout.addWidget(self.fields_table, stretch=1)

    @staticmethod
    def _titled(title: str, widget: QWidget) -> QWidget:
        box = QWidget()
        layout = QVBoxLayout(box)
        layout.setContentsMargins(0, 0, 0, 0)
        label = QLabel(title)
        label.setStyleSheet("font-weight: bold;")
        layout.addWidget(label)
        layout.addWidget(widget)
        return box


class BibTexStringDetailsView(DatabaseChangeDetailsView):
    """An added, deleted, modified or renamed @string."""

    def __init__(self, header: str, old_string: Optional[BibtexString],
                 new_string: Optional[BibtexString], parent: Optional[QWidget] = None):
        super().__init__(header, parent)
        form = QFormLayout()
        if old_string is not None:
            form.addRow(tr("changes.in_library"), QLabel(self._describe(old_string)))
        if new_string is not None:
            form.addRow(tr("changes.on_disk"), QLabel(self._describe(new_string)))
        self._layout.addLayout(form)
        self._layout.addStretch()

    @staticmethod
    def _describe(string: BibtexString) -> str:
        return f"@string{{{string.name} = {string.content}}}"


class PreambleChangeDetailsView(DatabaseChangeDetailsView):
    def __init__(self, change: PreambleChange, parent: Optional[QWidget] = None):
        super().__init__(change.name, parent)
        for title, text in ((tr("changes.in_library"), change.old_preamble),
                            (tr("changes.on_disk"), change.new_preamble)):
            label = QLabel(title)
            label.setStyleSheet("font-weight: bold;")
            self._layout.addWidget(label)
            view = QPlainTextEdit()
            view.setReadOnly(True)
            view.setFont(QFont("Consolas", 10))
            view.setPlainText(text or "")
            self._layout.addWidget(view)
