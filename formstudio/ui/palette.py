"""Toolkit palette: field types that can be dragged onto the page."""

from __future__ import annotations

from PySide6.QtCore import QMimeData, Qt, Signal
from PySide6.QtGui import QDrag
from PySide6.QtWidgets import QLabel, QListWidget, QListWidgetItem, QVBoxLayout, QWidget

from formstudio.model.field import FIELD_KINDS, FieldType
from formstudio.viewer.canvas import FIELD_TYPE_MIME

_ICONS = {
    FieldType.TEXT: "📝",
    FieldType.SIGNATURE: "✍️",
    FieldType.DATE: "📅",
    FieldType.CHECKBOX: "☑️",
    FieldType.IMAGE: "🖼️",
}

PALETTE_ORDER = (
    FieldType.TEXT,
    FieldType.SIGNATURE,
    FieldType.DATE,
    FieldType.CHECKBOX,
    FieldType.IMAGE,
)


def field_type_mime(field_type: FieldType) -> QMimeData:
    mime = QMimeData()
    mime.setData(FIELD_TYPE_MIME, field_type.value.encode("utf-8"))
    return mime


class _PaletteList(QListWidget):
    drag_started = Signal(object)
    drag_finished = Signal()

    def __init__(self) -> None:
        super().__init__()
        self.setDragEnabled(True)
        self.setSelectionMode(QListWidget.SelectionMode.SingleSelection)
        for field_type in PALETTE_ORDER:
            item = QListWidgetItem(f"{_ICONS[field_type]}  {FIELD_KINDS[field_type].label}")
            item.setData(Qt.ItemDataRole.UserRole, field_type.value)
            self.addItem(item)

    def startDrag(self, supportedActions) -> None:  # type: ignore[override]
        item = self.currentItem()
        if item is None:
            return
        field_type = FieldType(item.data(Qt.ItemDataRole.UserRole))
        drag = QDrag(self)
        drag.setMimeData(field_type_mime(field_type))
        self.drag_started.emit(field_type)
        drag.exec(Qt.DropAction.CopyAction)
        self.drag_finished.emit()


class FieldPalette(QWidget):
    drag_started = Signal(object)
    drag_finished = Signal()

    def __init__(self) -> None:
        super().__init__()
        self.list = _PaletteList()
        self.list.drag_started.connect(self.drag_started)
        self.list.drag_finished.connect(self.drag_finished)

        title = QLabel("TOOLKIT")
        title.setStyleSheet("color: #9ca3af; font-weight: bold;")
        hint = QLabel("Drag items onto the PDF page.")
        hint.setStyleSheet("color: #9ca3af;")
        hint.setWordWrap(True)

        layout = QVBoxLayout(self)
        layout.addWidget(title)
        layout.addWidget(self.list, 1)
        layout.addWidget(hint)
