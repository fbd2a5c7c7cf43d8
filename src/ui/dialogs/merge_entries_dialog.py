"""
Merge entries dialog for resolving a modified entry by hand.
"""

from typing import Dict, Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QAbstractItemView,
    QButtonGroup,
    QDialog,
    QDialogButtonBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QPushButton,
    QRadioButton,
    QSplitter,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from src.core.entry_merger import LEFT, RIGHT, differing_fields, merge_entries
from src.core.settings_manager import AppSettings
from src.models.bib_models import BibDatabaseContext, BibEntry
from src.ui.base import BaseDialog
from src.ui.preview_viewer import PreviewViewer
from src.utils.locale_manager import tr

_FIELD_COL, _LEFT_COL, _RIGHT_COL = 0, 1, 2


class MergeEntriesDialog(QDialog, BaseDialog):
    """
    Dialog merging two versions of an entry field by field.

    Features:
    - One row per differing field, with a radio choice between both sides
    - "Take all" shortcuts for either side
    - Live preview of the merged entry
    """

    def __init__(
        self,
        left: BibEntry,
        right: BibEntry,
        left_label: str = "",
        right_label: str = "",
        database_context: Optional[BibDatabaseContext] = None,
        preferences: Optional[AppSettings] = None,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self._left = left
        self._right = right
        self._diffs = differing_fields(left, right)
        self._choices: Dict[str, str] = {diff.field: diff.default_side for diff in self._diffs}
        self._button_groups: Dict[str, QButtonGroup] = {}

        if preferences is None:
            from src.core.settings_manager import SettingsManager
            preferences = SettingsManager().settings
        self._preview_viewer = PreviewViewer(preferences)
        if database_context is not None:
            self._preview_viewer.set_database_context(database_context)

        self.setWindowTitle(tr("merge.title", key=left.display_key))
        self.setMinimumSize(700, 450)
        self.resize(preferences.merge_dialog_width, preferences.merge_dialog_height)
        self.setModal(True)

        self._setup_ui(left_label or tr("merge.left"), right_label or tr("merge.right"))
        self._update_preview()

    def _setup_ui(self, left_label: str, right_label: str) -> None:
        layout = QVBoxLayout(self)
        layout.setSpacing(10)

        info = QLabel(tr("merge.info"))
        info.setStyleSheet("color: gray; font-size: 11px;")
        info.setWordWrap(True)
        layout.addWidget(info)

        splitter = QSplitter(Qt.Vertical)

        self.fields_table = QTableWidget(len(self._diffs), 3)
        self.fields_table.setHorizontalHeaderLabels([tr("changes.field"), left_label, right_label])
        self.fields_table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.fields_table.setSelectionMode(QAbstractItemView.NoSelection)
        self.fields_table.verticalHeader().setVisible(False)
        header = self.fields_table.horizontalHeader()
        header.setSectionResizeMode(_FIELD_COL, QHeaderView.ResizeToContents)
        header.setSectionResizeMode(_LEFT_COL, QHeaderView.Stretch)
        header.setSectionResizeMode(_RIGHT_COL, QHeaderView.Stretch)

        for row, diff in enumerate(self._diffs):
            self.fields_table.setItem(row, _FIELD_COL, QTableWidgetItem(diff.field))
            group = QButtonGroup(self)
            for col, side in ((_LEFT_COL, LEFT), (_RIGHT_COL, RIGHT)):
                value = diff.value_for(side)
                radio = QRadioButton(value if value else tr("merge.empty_value"))
                radio.setToolTip(value or "")
                radio.setChecked(self._choices[diff.field] == side)
                radio.toggled.connect(
                    lambda checked, f=diff.field, s=side: self._on_choice_toggled(f, s, checked)
                )
                group.addButton(radio)
                self.fields_table.setCellWidget(row, col, radio)
            self._button_groups[diff.field] = group
        splitter.addWidget(self.fields_table)

        preview_box = QWidget()
        preview_layout = QVBoxLayout(preview_box)
        preview_layout.setContentsMargins(0, 0, 0, 0)
        preview_label = QLabel(tr("merge.result_preview"))
        preview_label.setStyleSheet("font-weight: bold;")
        preview_layout.addWidget(preview_label)
        self.result_preview = self._preview_viewer.create_widget(None)
        preview_layout.addWidget(self.result_preview)
        splitter.addWidget(preview_box)
        splitter.setSizes([300, 200])
        layout.addWidget(splitter, stretch=1)

        shortcuts = QHBoxLayout()
        self.btn_take_left = QPushButton(tr("merge.take_all_left"))
        self.btn_take_left.clicked.connect(lambda: self.choose_all(LEFT))
        shortcuts.addWidget(self.btn_take_left)
        self.btn_take_right = QPushButton(tr("merge.take_all_right"))
        self.btn_take_right.clicked.connect(lambda: self.choose_all(RIGHT))
        shortcuts.addWidget(self.btn_take_right)
        shortcuts.addStretch()
        layout.addLayout(shortcuts)

        button_box = QDialogButtonBox()
        btn_merge = QPushButton(tr("merge.merge"))
        btn_merge.setObjectName("primary")
        button_box.addButton(btn_merge, QDialogButtonBox.AcceptRole)
        btn_cancel = QPushButton(tr("common.cancel"))
        button_box.addButton(btn_cancel, QDialogButtonBox.RejectRole)
        button_box.accepted.connect(self.accept)
        button_box.rejected.connect(self.reject)
        layout.addWidget(button_box)

    def _on_choice_toggled(self, field: str, side: str, checked: bool) -> None:
        if not checked:
            return
        self._choices[field] = side
        self._update_preview()

    def _update_preview(self) -> None:
        self.result_preview.setHtml(self._preview_viewer.render_entry(self.merged_entry()))

    def choose(self, field: str, side: str) -> None:
        """Pick the side a field is taken from (updates the radio buttons)."""
        row = next((i for i, diff in enumerate(self._diffs) if diff.field == field), -1)
        if row < 0:
            return
        col = _LEFT_COL if side == LEFT else _RIGHT_COL
        radio = self.fields_table.cellWidget(row, col)
        if isinstance(radio, QRadioButton):
            radio.setChecked(True)

    def choose_all(self, side: str) -> None:
        for diff in self._diffs:
            self.choose(diff.field, side)

    @property
    def choices(self) -> Dict[str, str]:
        return dict(self._choices)

    def merged_entry(self) -> BibEntry:
        return merge_entries(self._left, self._right, self._choices)

    def get_result(self) -> Optional[BibEntry]:
        """Merged entry when the dialog was accepted, ``None`` when cancelled."""
        if self.result() != QDialog.Accepted:
            return None
        return self.merged_entry()
