"""
Reusable Table Component with row data and flexible columns.
"""

from typing import List, Dict, Any, Optional
from PySide6.QtWidgets import (
    QTableWidget, QTableWidgetItem, QHeaderView, QAbstractItemView
)
from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor


class TableColumn:
    """Represents a table column configuration."""
    def __init__(self, key: str, header: str, width_mode: QHeaderView.ResizeMode = QHeaderView.ResizeToContents,
                 fixed_width: Optional[int] = None, alignment: Qt.AlignmentFlag = Qt.AlignLeft | Qt.AlignVCenter):
        self.key = key
        self.header = header
        self.width_mode = width_mode
        self.fixed_width = fixed_width
        self.alignment = alignment


class ReusableTable(QTableWidget):
    """
    Reusable read-only table component with:
    - Flexible columns via props
    - Per-row data dicts (keys starting with "_" are not displayed)
    - Single/multi selection support
    - Optional sorting (off by default so row index == data index)

    A cell value may be a plain value or a dict with "text", and optional
    "tooltip" and "color" keys.
    """

    # Signals
    item_selected = Signal(list)  # Emits list of selected row indices

    def __init__(self, columns: List[TableColumn],
                 selection_mode: QAbstractItemView.SelectionMode = QAbstractItemView.SingleSelection,
                 sortable: bool = False, parent=None):
        super().__init__(parent)

        self.columns = columns
        self._data: List[Dict[str, Any]] = []

        self._setup_table(selection_mode, sortable)
        self.itemSelectionChanged.connect(self._on_selection_changed)

    def _setup_table(self, selection_mode: QAbstractItemView.SelectionMode, sortable: bool):
        """Setup table structure and appearance."""
        self.setColumnCount(len(self.columns))
        self.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.setSelectionMode(selection_mode)
        self.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.setAlternatingRowColors(True)
        self.setSortingEnabled(sortable)
        self.verticalHeader().setVisible(False)

        self.setHorizontalHeaderLabels([col.header for col in self.columns])

        header = self.horizontalHeader()
        for col_idx, col in enumerate(self.columns):
            if col.fixed_width:
                header.setSectionResizeMode(col_idx, QHeaderView.Fixed)
                self.setColumnWidth(col_idx, col.fixed_width)
            else:
                header.setSectionResizeMode(col_idx, col.width_mode)

        self.verticalHeader().setDefaultSectionSize(32)

    def _on_selection_changed(self):
        """Handle row selection changes."""
        self.item_selected.emit(self.get_selected_rows())

    def set_data(self, data: List[Dict[str, Any]]):
        """Set table data."""
        self._data = list(data)
        self.setRowCount(len(self._data))

        for row_idx, row_data in enumerate(self._data):
            for col_idx, col in enumerate(self.columns):
                value = row_data.get(col.key, "")
                text, tooltip, color = value, None, None
                if isinstance(value, dict):
                    text = value.get("text", "")
                    tooltip = value.get("tooltip")
                    color = value.get("color")

                item = QTableWidgetItem("" if text is None else str(text))
                item.setTextAlignment(col.alignment)
                if tooltip:
                    item.setToolTip(str(tooltip))
                if color:
                    item.setForeground(QColor(color))
                self.setItem(row_idx, col_idx, item)

    def get_row_data(self, row_idx: int) -> Optional[Dict[str, Any]]:
        """Get data for a specific row."""
        if 0 <= row_idx < len(self._data):
            return self._data[row_idx]
        return None

    def get_selected_rows(self) -> List[int]:
        """Get sorted list of selected row indices."""
        return sorted({index.row() for index in self.selectionModel().selectedRows()})
