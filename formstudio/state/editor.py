"""Application state aggregate driven by the main window."""

from __future__ import annotations

import logging

from formstudio.geometry.mapper import ContainerBounds
from formstudio.model.document import PdfDocument
from formstudio.model.field import Field, FieldType
from formstudio.state.drag import DragCreateController, DragMoveController
from formstudio.state.selection import Selection
from formstudio.state.session import DocumentSession
from formstudio.state.store import FieldStore
from formstudio.submission.assembler import SubmissionPayload, build_payload

logger = logging.getLogger(__name__)


class EditorState:
    """Owns every piece of editor state and exposes the user operations.

    Each method runs to completion synchronously; widgets read the result
    back and repaint.
    """

    def __init__(self, zoom: float = 1.0) -> None:
        self.store = FieldStore()
        self.selection = Selection()
        self.session = DocumentSession()
        self.session.set_zoom(zoom)
        self.drag_create = DragCreateController(self.store, self.selection)
        self.drag_move = DragMoveController(self.store, self.selection)
        self.signature_target: int | None = None

    # Document ---------------------------------------------------------

    @property
    def current_page(self) -> int:
        return self.session.current_page

    @property
    def has_document(self) -> bool:
        return self.session.has_document

    def load_document(self, document: PdfDocument) -> None:
        self._reset_fields()
        self.session.replace_document(document)
        logger.info("Editing %s", document.path)

    def close_document(self) -> None:
        self._reset_fields()
        self.session.close_document()

    def go_to_page(self, page: int) -> int:
        return self.session.go_to_page(page)

    def visible_fields(self) -> list[Field]:
        if not self.session.has_document:
            return []
        return self.store.on_page(self.session.current_page)

    # Drag-create ------------------------------------------------------

    def begin_palette_drag(self, field_type: FieldType) -> None:
        self.drag_create.begin(field_type)

    def drop_on_container(self, client_x: float, client_y: float, bounds: ContainerBounds) -> Field | None:
        if not self.session.has_document:
            self.drag_create.cancel()
            return None
        return self.drag_create.drop(
            client_x,
            client_y,
            bounds,
            page=self.session.current_page,
            page_count=self.session.page_count or None,
        )

    def cancel_palette_drag(self) -> None:
        self.drag_create.cancel()

    # Drag-move --------------------------------------------------------

    def press_field(self, field_id: int) -> None:
        self.drag_move.press(field_id)

    def pointer_move(self, client_x: float, client_y: float, bounds: ContainerBounds) -> Field | None:
        return self.drag_move.pointer_move(client_x, client_y, bounds)

    def pointer_release(self) -> None:
        self.drag_move.release()

    # Values and selection ---------------------------------------------

    def select_field(self, field_id: int) -> None:
        if field_id in self.store:
            self.selection.select(field_id)

    def clear_selection(self) -> None:
        self.selection.clear()

    def selected_field(self) -> Field | None:
        if self.selection.selected_id is None:
            return None
        return self.store.get(self.selection.selected_id)

    def update_value(self, field_id: int, value: object) -> Field | None:
        return self.store.update(field_id, value)

    def delete_field(self, field_id: int) -> bool:
        removed = self.store.delete(field_id)
        if removed:
            self.selection.forget(field_id)
            if self.drag_move.moving_id == field_id:
                self.drag_move.release()
            if self.signature_target == field_id:
                self.signature_target = None
        return removed

    def can_show_delete(self, field_id: int) -> bool:
        item = self.store.get(field_id)
        if item is None:
            return False
        return self.selection.is_selected(field_id) or item.has_value

    # Signature capture ------------------------------------------------

    def open_signature(self, field_id: int) -> bool:
        item = self.store.get(field_id)
        if item is None or item.field_type is not FieldType.SIGNATURE:
            return False
        self.selection.select(field_id)
        self.signature_target = field_id
        return True

    def apply_signature(self, data_uri: str) -> Field | None:
        target = self.signature_target
        self.signature_target = None
        if target is None:
            return None
        return self.store.update(target, data_uri)

    def cancel_signature(self) -> None:
        self.signature_target = None

    # Submission -------------------------------------------------------

    def build_submission(self) -> SubmissionPayload:
        return build_payload(self.session.document, self.store)

    def _reset_fields(self) -> None:
        self.store.clear()
        self.selection.clear()
        self.drag_create.cancel()
        self.drag_move.release()
        self.signature_target = None
