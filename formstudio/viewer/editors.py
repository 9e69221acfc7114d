"""In-place editors, one widget class per field type."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

from PySide6.QtCore import QDate, Qt, Signal
from PySide6.QtWidgets import (
    QCheckBox,
    QDateEdit,
    QFileDialog,
    QLabel,
    QPlainTextEdit,
    QPushButton,
    QStackedLayout,
    QVBoxLayout,
    QWidget,
)

from formstudio.model.errors import InvalidFileType
from formstudio.model.field import Field, FieldType, FieldValue
from formstudio.viewer.images import IMAGE_FILTER, data_uri_to_pixmap, image_file_to_data_uri

logger = logging.getLogger(__name__)

ISO_FORMAT = "yyyy-MM-dd"


class FieldEditor(QWidget):
    """Base editor. ``set_field`` refreshes from the model without echoing edits."""

    value_edited = Signal(int, object)
    signature_requested = Signal(int)

    field_type: ClassVar[FieldType]

    def __init__(self, field: Field, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._field = field
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)

    @property
    def field_id(self) -> int:
        return self._field.id

    def set_field(self, field: Field) -> None:
        self._field = field
        self.blockSignals(True)
        try:
            self._show_value(field.value)
        finally:
            self.blockSignals(False)

    def _show_value(self, value: FieldValue) -> None:
        # Every registered editor overrides this.
        raise NotImplementedError

    def _emit(self, value: FieldValue) -> None:
        self.value_edited.emit(self._field.id, value)


class TextFieldEditor(FieldEditor):
    field_type = FieldType.TEXT

    def __init__(self, field: Field, parent: QWidget | None = None) -> None:
        super().__init__(field, parent)
        self.input = QPlainTextEdit()
        self.input.setPlaceholderText("Type here...")
        self.input.setFrameShape(QPlainTextEdit.Shape.NoFrame)
        self.input.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.input.textChanged.connect(self._on_text_changed)
        self._layout.addWidget(self.input)
        self.set_field(field)

    def _show_value(self, value: FieldValue) -> None:
        if self.input.toPlainText() != value:
            self.input.blockSignals(True)
            self.input.setPlainText(str(value))
            self.input.blockSignals(False)

    def _on_text_changed(self) -> None:
        self._emit(self.input.toPlainText())


class DateFieldEditor(FieldEditor):
    field_type = FieldType.DATE

    def __init__(self, field: Field, parent: QWidget | None = None) -> None:
        super().__init__(field, parent)
        self.input = QDateEdit()
        self.input.setCalendarPopup(True)
        self.input.setDisplayFormat(ISO_FORMAT)
        self.input.dateChanged.connect(self._on_date_changed)
        self._layout.addWidget(self.input)
        self.set_field(field)

    def _show_value(self, value: FieldValue) -> None:
        parsed = QDate.fromString(str(value), ISO_FORMAT) if value else QDate.currentDate()
        if parsed.isValid() and parsed != self.input.date():
            self.input.blockSignals(True)
            self.input.setDate(parsed)
            self.input.blockSignals(False)

    def _on_date_changed(self, value: QDate) -> None:
        self._emit(value.toString(ISO_FORMAT))


class CheckboxFieldEditor(FieldEditor):
    field_type = FieldType.CHECKBOX

    def __init__(self, field: Field, parent: QWidget | None = None) -> None:
        super().__init__(field, parent)
        self.input = QCheckBox()
        self.input.toggled.connect(self._emit)
        self._layout.addWidget(self.input, alignment=Qt.AlignmentFlag.AlignCenter)
        self.set_field(field)

    def _show_value(self, value: FieldValue) -> None:
        self.input.blockSignals(True)
        self.input.setChecked(bool(value))
        self.input.blockSignals(False)


class _RasterFieldEditor(FieldEditor):
    """Two pages: an affordance while empty, the stored image once set."""

    def __init__(self, field: Field, parent: QWidget | None = None) -> None:
        super().__init__(field, parent)
        self.preview = QLabel()
        self.preview.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.preview.setScaledContents(True)
        self._stack = QStackedLayout()
        self._layout.addLayout(self._stack)

    @property
    def shows_image(self) -> bool:
        return self._stack.currentIndex() == 1

    def _show_value(self, value: FieldValue) -> None:
        if value:
            self.preview.setPixmap(data_uri_to_pixmap(str(value)))
            self._stack.setCurrentIndex(1)
        else:
            self.preview.clear()
            self._stack.setCurrentIndex(0)


class SignatureFieldEditor(_RasterFieldEditor):
    field_type = FieldType.SIGNATURE

    def __init__(self, field: Field, parent: QWidget | None = None) -> None:
        super().__init__(field, parent)
        self.sign_button = QPushButton("Sign Here")
        self.sign_button.clicked.connect(self._request_signature)
        self._stack.addWidget(self.sign_button)
        self._stack.addWidget(self.preview)
        self.set_field(field)

    def _request_signature(self) -> None:
        self.signature_requested.emit(self._field.id)


class ImageFieldEditor(_RasterFieldEditor):
    field_type = FieldType.IMAGE

    def __init__(self, field: Field, parent: QWidget | None = None) -> None:
        super().__init__(field, parent)
        self.upload_button = QPushButton("Upload")
        self.upload_button.clicked.connect(self.choose_image)

        image_page = QWidget()
        self.remove_button = QPushButton("✕", image_page)
        self.remove_button.setFixedSize(18, 18)
        self.remove_button.clicked.connect(self.remove_image)
        image_layout = QVBoxLayout(image_page)
        image_layout.setContentsMargins(0, 0, 0, 0)
        image_layout.addWidget(self.preview)
        self.remove_button.raise_()

        self._stack.addWidget(self.upload_button)
        self._stack.addWidget(image_page)
        self.set_field(field)

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self.remove_button.move(max(0, self.width() - self.remove_button.width()), 0)

    def choose_image(self) -> None:
        path = self._ask_image_path()
        if not path:
            return
        try:
            data_uri = image_file_to_data_uri(path)
        except (InvalidFileType, OSError) as exc:
            logger.warning("Image upload ignored: %s", exc)
            return
        self._emit(data_uri)

    def remove_image(self) -> None:
        self._emit("")

    def _ask_image_path(self) -> str:
        path, _ = QFileDialog.getOpenFileName(self, "Choose Image", str(Path.home()), IMAGE_FILTER)
        return path


EDITORS: dict[FieldType, type[FieldEditor]] = {
    editor.field_type: editor
    for editor in (
        TextFieldEditor,
        DateFieldEditor,
        CheckboxFieldEditor,
        SignatureFieldEditor,
        ImageFieldEditor,
    )
}


def create_editor(field: Field, parent: QWidget | None = None) -> FieldEditor:
    return EDITORS[field.field_type](field, parent)
