"""
Dialog Service
Single place through which non-widget code opens dialogs and message boxes,
so it can be replaced by a scripted fake in tests.
"""

from typing import Any, Optional

from PySide6.QtWidgets import QDialog, QMessageBox, QWidget

from src.utils.locale_manager import tr


class DialogService:
    """Opens modal dialogs on top of an optional parent window."""

    def __init__(self, parent: Optional[QWidget] = None):
        self._parent = parent

    @property
    def parent(self) -> Optional[QWidget]:
        return self._parent

    def show_custom_dialog_and_wait(self, dialog: QDialog) -> Any:
        """
        Run a dialog modally and return its converted result.

        Dialogs using the ``BaseDialog`` mixin convert their outcome through
        ``get_result()``; for plain dialogs the ``QDialog`` result code is
        returned.
        """
        code = dialog.exec()
        get_result = getattr(dialog, "get_result", None)
        if callable(get_result):
            return get_result()
        return code

    def notify(self, message: str, title: Optional[str] = None) -> None:
        QMessageBox.information(self._parent, title or tr("common.info"), message)
