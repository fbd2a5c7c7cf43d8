"""
Reusable UI components.
"""

from src.ui.components.table import ReusableTable, TableColumn

__all__ = ["ReusableTable", "TableColumn"]
