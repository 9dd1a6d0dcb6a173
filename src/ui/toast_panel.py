from __future__ import annotations

from typing import Dict

from PySide6 import QtCore, QtGui, QtWidgets

from src.core.responses import Toast, ToastType

SEVERITY_COLOR: Dict[ToastType, QtGui.QColor] = {
    ToastType.INFO: QtGui.QColor("#274060"),
    ToastType.WARNING: QtGui.QColor("#665200"),
    ToastType.ERROR: QtGui.QColor("#7a1f1f"),
}


class ToastPanel(QtWidgets.QWidget):
    """List-based toast display with severity styling."""

    MAX_ITEMS = 50

    def __init__(self, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self._list = QtWidgets.QListWidget(self)
        self._list.setSelectionMode(QtWidgets.QAbstractItemView.NoSelection)
        self._list.setFocusPolicy(QtCore.Qt.NoFocus)
        layout = QtWidgets.QVBoxLayout(self)
        layout.addWidget(self._list)
        layout.setContentsMargins(0, 0, 0, 0)

    @QtCore.Slot(object)
    def append_toast(self, toast: Toast) -> None:
        text = f"{toast.toast_type.value} {toast.category}: {toast.message}"
        item = QtWidgets.QListWidgetItem(text)
        if toast.details:
            item.setToolTip(toast.details)
        item.setBackground(SEVERITY_COLOR.get(toast.toast_type, QtGui.QColor("#ffffff")))
        self._list.addItem(item)
        self._list.scrollToBottom()
        if self._list.count() > self.MAX_ITEMS:
            self._list.takeItem(0)

    def count(self) -> int:
        return self._list.count()

    def clear(self) -> None:
        self._list.clear()


__all__ = ["ToastPanel"]
