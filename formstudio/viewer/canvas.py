"""Interactive page canvas: page image, field overlay, drop target."""

from __future__ import annotations

import logging

from PySide6.QtCore import QPointF, Qt, Signal
from PySide6.QtGui import QColor, QPainter, QPixmap
from PySide6.QtWidgets import QFrame, QPushButton, QVBoxLayout, QWidget

from formstudio.geometry.mapper import ContainerBounds, field_rect
from formstudio.model.errors import InvalidFieldValue
from formstudio.model.field import Field, FieldType
from formstudio.state.editor import EditorState
from formstudio.viewer.editors import FieldEditor, create_editor

logger = logging.getLogger(__name__)

FIELD_TYPE_MIME = "application/x-formstudio-field-type"

_GRIP = 3


class FieldFrame(QFrame):
    """Border around one editor; the border is the drag handle."""

    pressed = Signal(int)
    dragged = Signal(QPointF)
    released = Signal()
    delete_requested = Signal(int)

    def __init__(self, field: Field, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.field = field
        self.setCursor(Qt.CursorShape.SizeAllCursor)
        self.setFixedSize(field.width, field.height)

        self.editor: FieldEditor = create_editor(field)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(_GRIP, _GRIP, _GRIP, _GRIP)
        layout.addWidget(self.editor)

        self.delete_button = QPushButton("✕", self)
        self.delete_button.setFixedSize(16, 16)
        self.delete_button.setCursor(Qt.CursorShape.PointingHandCursor)
        self.delete_button.clicked.connect(lambda: self.delete_requested.emit(self.field.id))
        self.delete_button.move(field.width - 16, 0)
        self.delete_button.hide()

        self.set_selected(False)

    def set_field(self, field: Field) -> None:
        self.field = field
        self.editor.set_field(field)

    def set_selected(self, selected: bool) -> None:
        color = "#2563eb" if selected else "#93c5fd"
        self.setStyleSheet(
            f"FieldFrame {{ border: 2px solid {color}; background: rgba(239, 246, 255, 40); }}"
        )

    def set_delete_visible(self, visible: bool) -> None:
        self.delete_button.setVisible(visible)
        if visible:
            self.delete_button.raise_()

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        if event.button() != Qt.MouseButton.LeftButton:
            return
        self.pressed.emit(self.field.id)
        event.accept()

    def mouseMoveEvent(self, event) -> None:  # type: ignore[override]
        # Qt keeps delivering moves to the pressed widget until release.
        self.dragged.emit(event.globalPosition())

    def mouseReleaseEvent(self, event) -> None:  # type: ignore[override]
        del event
        self.released.emit()


class PageCanvas(QWidget):
    fields_changed = Signal()
    selection_changed = Signal(object)
    signature_requested = Signal(int)

    def __init__(self, state: EditorState) -> None:
        super().__init__()
        self._state = state
        self._pixmap: QPixmap | None = None
        self._frames: dict[int, FieldFrame] = {}

        self.setAcceptDrops(True)
        self.setMinimumSize(500, 600)

    @property
    def frames(self) -> dict[int, FieldFrame]:
        return self._frames

    def container_bounds(self) -> ContainerBounds:
        if self._pixmap is None:
            return ContainerBounds(0.0, 0.0, 0.0, 0.0)
        return ContainerBounds(0.0, 0.0, float(self.width()), float(self.height()))

    def set_page(self, pixmap: QPixmap) -> None:
        self._pixmap = pixmap
        self.setMinimumSize(0, 0)
        self.resize(pixmap.size())
        self.refresh_fields()
        self.update()

    def clear_page(self) -> None:
        self._pixmap = None
        self._remove_frames(list(self._frames))
        self.setMinimumSize(500, 600)
        self.resize(500, 600)
        self.update()

    def refresh_fields(self) -> None:
        """Bring the overlay in line with the fields of the active page."""
        visible = self._state.visible_fields() if self._pixmap is not None else []
        visible_ids = {item.id for item in visible}
        self._remove_frames([field_id for field_id in self._frames if field_id not in visible_ids])

        for item in visible:
            frame = self._frames.get(item.id)
            if frame is None:
                frame = self._create_frame(item)
            else:
                frame.set_field(item)
            self._place(frame, item)
            selected = self._state.selection.is_selected(item.id)
            frame.set_selected(selected)
            frame.set_delete_visible(self._state.can_show_delete(item.id))
            if selected:
                frame.raise_()

    def paintEvent(self, event) -> None:  # type: ignore[override]
        del event
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor("#e9eaee"))
        if self._pixmap is None:
            painter.setPen(QColor("#6b7280"))
            painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, "Open a PDF to start editing")
            return
        painter.drawPixmap(0, 0, self._pixmap)

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        for frame in self._frames.values():
            self._place(frame, frame.field)

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        if self._pixmap is None or event.button() != Qt.MouseButton.LeftButton:
            return
        if self._state.selection.selected_id is not None:
            self._state.clear_selection()
            self.refresh_fields()
            self.selection_changed.emit(None)

    def mouseReleaseEvent(self, event) -> None:  # type: ignore[override]
        del event
        self._state.pointer_release()

    # Drag-create ------------------------------------------------------

    def dragEnterEvent(self, event) -> None:  # type: ignore[override]
        if self._pixmap is not None and event.mimeData().hasFormat(FIELD_TYPE_MIME):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event) -> None:  # type: ignore[override]
        if self._pixmap is not None and event.mimeData().hasFormat(FIELD_TYPE_MIME):
            event.acceptProposedAction()

    def dropEvent(self, event) -> None:  # type: ignore[override]
        raw = bytes(event.mimeData().data(FIELD_TYPE_MIME)).decode("utf-8")
        try:
            field_type = FieldType(raw)
        except ValueError:
            event.ignore()
            return
        self._state.begin_palette_drag(field_type)
        pos = event.position()
        if self.drop_at(pos.x(), pos.y()) is not None:
            event.acceptProposedAction()
        else:
            event.ignore()

    def drop_at(self, x: float, y: float) -> Field | None:
        created = self._state.drop_on_container(x, y, self.container_bounds())
        if created is not None:
            self.refresh_fields()
            self.fields_changed.emit()
            self.selection_changed.emit(created)
        return created

    # Drag-move --------------------------------------------------------

    def _on_frame_pressed(self, field_id: int) -> None:
        self._state.press_field(field_id)
        self.refresh_fields()
        self.selection_changed.emit(self._state.selected_field())

    def _on_frame_dragged(self, global_pos: QPointF) -> None:
        local = self.mapFromGlobal(global_pos)
        self.move_pointer(local.x(), local.y())

    def move_pointer(self, x: float, y: float) -> Field | None:
        moved = self._state.pointer_move(x, y, self.container_bounds())
        if moved is not None:
            frame = self._frames.get(moved.id)
            if frame is not None:
                frame.field = moved
                self._place(frame, moved)
            self.fields_changed.emit()
        return moved

    def _on_frame_released(self) -> None:
        self._state.pointer_release()

    # Values -----------------------------------------------------------

    def _on_value_edited(self, field_id: int, value: object) -> None:
        try:
            updated = self._state.update_value(field_id, value)
        except InvalidFieldValue as exc:
            logger.warning("Rejected value for field %d: %s", field_id, exc)
            return
        if updated is not None:
            self.refresh_fields()
            self.fields_changed.emit()

    def _on_delete_requested(self, field_id: int) -> None:
        if self._state.delete_field(field_id):
            self.refresh_fields()
            self.fields_changed.emit()
            self.selection_changed.emit(self._state.selected_field())

    def _create_frame(self, item: Field) -> FieldFrame:
        frame = FieldFrame(item, self)
        frame.pressed.connect(self._on_frame_pressed)
        frame.dragged.connect(self._on_frame_dragged)
        frame.released.connect(self._on_frame_released)
        frame.delete_requested.connect(self._on_delete_requested)
        frame.editor.value_edited.connect(self._on_value_edited)
        frame.editor.signature_requested.connect(self.signature_requested)
        frame.show()
        self._frames[item.id] = frame
        return frame

    def _remove_frames(self, field_ids: list[int]) -> None:
        for field_id in field_ids:
            frame = self._frames.pop(field_id)
            frame.hide()
            frame.deleteLater()

    def _place(self, frame: FieldFrame, item: Field) -> None:
        rect = field_rect(item.position, item.width, item.height, self.width(), self.height())
        frame.move(round(rect.left), round(rect.top))
