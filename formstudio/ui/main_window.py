"""Main application window: page preview, field placement and submission."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import Qt, QThread, QUrl
from PySide6.QtGui import QAction, QDesktopServices, QKeySequence, QPixmap
from PySide6.QtWidgets import (
    QFileDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QScrollArea,
    QSplitter,
    QToolBar,
)

from formstudio.config import Settings
from formstudio.model.errors import InvalidFileType, MissingDocument, PdfLoadError, PdfRenderError
from formstudio.pdf.loader import load_pdf
from formstudio.pdf.renderer import render_page_image
from formstudio.signature.dialog import SignatureDialog
from formstudio.state.editor import EditorState
from formstudio.submission.assembler import SubmissionResult
from formstudio.submission.worker import SubmitWorker
from formstudio.ui.palette import FieldPalette
from formstudio.viewer.canvas import PageCanvas

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.setWindowTitle("PDF Form Builder")
        self.resize(1300, 850)

        self._settings = settings or Settings()
        self._state = EditorState(zoom=self._settings.zoom)
        self._submit_thread: QThread | None = None
        self._submit_worker: SubmitWorker | None = None
        self.last_result: SubmissionResult | None = None

        self.palette = FieldPalette()
        self.palette.drag_started.connect(self._state.begin_palette_drag)
        self.palette.drag_finished.connect(self._state.cancel_palette_drag)

        self.canvas = PageCanvas(self._state)
        self.canvas.fields_changed.connect(self._on_canvas_fields_changed)
        self.canvas.selection_changed.connect(lambda _field: self._update_actions())
        self.canvas.signature_requested.connect(self.open_signature_pad)

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(False)
        self.scroll_area.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.scroll_area.setWidget(self.canvas)

        splitter = QSplitter()
        splitter.addWidget(self.palette)
        splitter.addWidget(self.scroll_area)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 4)
        self.setCentralWidget(splitter)

        self._build_toolbar()
        self._update_actions()
        self.statusBar().showMessage("Ready")

    @property
    def state(self) -> EditorState:
        return self._state

    def _build_toolbar(self) -> None:
        toolbar = QToolBar("Main Toolbar")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        open_action = QAction("Open PDF", self)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self.open_pdf)
        toolbar.addAction(open_action)

        toolbar.addSeparator()

        self._prev_action = QAction("Prev", self)
        self._prev_action.triggered.connect(self.show_previous_page)
        toolbar.addAction(self._prev_action)

        self._page_label = QLabel()
        toolbar.addWidget(self._page_label)

        self._next_action = QAction("Next", self)
        self._next_action.triggered.connect(self.show_next_page)
        toolbar.addAction(self._next_action)

        toolbar.addSeparator()

        self._zoom_out_action = QAction("Zoom Out", self)
        self._zoom_out_action.setShortcut(QKeySequence.StandardKey.ZoomOut)
        self._zoom_out_action.triggered.connect(self.zoom_out)
        toolbar.addAction(self._zoom_out_action)

        self._zoom_in_action = QAction("Zoom In", self)
        self._zoom_in_action.setShortcut(QKeySequence.StandardKey.ZoomIn)
        self._zoom_in_action.triggered.connect(self.zoom_in)
        toolbar.addAction(self._zoom_in_action)

        toolbar.addSeparator()

        self._delete_action = QAction("Delete Field", self)
        self._delete_action.triggered.connect(self.delete_selected_field)
        toolbar.addAction(self._delete_action)

        self._finish_action = QAction("Finish && Save", self)
        self._finish_action.triggered.connect(self.finish)
        toolbar.addAction(self._finish_action)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._close_document()
        if self._submit_thread is not None and self._submit_thread.isRunning():
            self._submit_thread.quit()
            self._submit_thread.wait()
        super().closeEvent(event)

    def open_pdf(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Open PDF",
            str(Path.home()),
            "PDF Files (*.pdf)",
        )
        if not file_path:
            return
        self.load_document(file_path)

    def load_document(self, file_path: str | Path) -> bool:
        try:
            document = load_pdf(file_path)
        except InvalidFileType as exc:
            logger.info("Ignored input: %s", exc)
            self.statusBar().showMessage(str(exc))
            return False
        except PdfLoadError as exc:
            QMessageBox.critical(self, "Open Failed", str(exc))
            return False

        self._state.load_document(document)
        self._render_current_page()
        self.statusBar().showMessage(f"Loaded: {file_path}")
        return True

    def show_previous_page(self) -> None:
        if not self._state.has_document or self._state.current_page <= 1:
            return
        self._state.session.previous_page()
        self._render_current_page()

    def show_next_page(self) -> None:
        session = self._state.session
        if not session.has_document or session.current_page >= session.page_count:
            return
        session.next_page()
        self._render_current_page()

    def zoom_in(self) -> None:
        self._state.session.zoom_in()
        self._render_current_page()

    def zoom_out(self) -> None:
        self._state.session.zoom_out()
        self._render_current_page()

    def delete_selected_field(self) -> None:
        selected = self._state.selected_field()
        if selected is None:
            self.statusBar().showMessage("No selected field to delete.")
            return
        self._state.delete_field(selected.id)
        self.canvas.refresh_fields()
        self._on_canvas_fields_changed()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        if event.key() == Qt.Key.Key_Delete:
            self.delete_selected_field()
            event.accept()
            return
        super().keyPressEvent(event)

    def open_signature_pad(self, field_id: int) -> None:
        if not self._state.open_signature(field_id):
            return
        dialog = SignatureDialog(on_save=self._apply_signature, parent=self)
        if dialog.exec() != SignatureDialog.DialogCode.Accepted:
            self._state.cancel_signature()
        self.canvas.refresh_fields()

    def _apply_signature(self, data_uri: str) -> None:
        if self._state.apply_signature(data_uri) is not None:
            self._on_canvas_fields_changed()

    def finish(self) -> None:
        if self._submit_thread is not None:
            self.statusBar().showMessage("Submission already in progress.")
            return
        try:
            payload = self._state.build_submission()
        except MissingDocument:
            return
        except OSError as exc:
            QMessageBox.critical(self, "Submission Failed", str(exc))
            return

        worker = SubmitWorker(payload, self._settings.endpoint, self._settings.timeout)
        thread = QThread(self)
        self._submit_worker = worker
        self._submit_thread = thread
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        worker.finished.connect(self._on_submit_finished)
        worker.failed.connect(self._on_submit_failed)
        worker.done.connect(thread.quit)
        worker.done.connect(worker.deleteLater)
        thread.finished.connect(self._on_submit_thread_finished)
        thread.finished.connect(thread.deleteLater)
        self._finish_action.setEnabled(False)
        self.statusBar().showMessage("Submitting...")
        thread.start()

    def _on_submit_finished(self, result: SubmissionResult) -> None:
        self.last_result = result
        if result.signed_pdf_url:
            QDesktopServices.openUrl(QUrl(result.signed_pdf_url))
        self.statusBar().showMessage("Document signed and saved.")
        QMessageBox.information(self, "Finished", "Document Signed & Saved Successfully!")

    def _on_submit_failed(self, message: str) -> None:
        self.statusBar().showMessage(f"Error: {message}")
        QMessageBox.critical(self, "Error", message)

    def _on_submit_thread_finished(self) -> None:
        self._submit_thread = None
        self._submit_worker = None
        self._update_actions()

    def _on_canvas_fields_changed(self) -> None:
        count = len(self._state.visible_fields())
        self.statusBar().showMessage(f"Page {self._state.current_page}: {count} field(s)")
        self._update_actions()

    def _update_actions(self) -> None:
        session = self._state.session
        has_document = session.has_document
        self._prev_action.setEnabled(has_document and session.current_page > 1)
        self._next_action.setEnabled(has_document and session.current_page < session.page_count)
        self._finish_action.setVisible(len(self._state.store) > 0)
        self._finish_action.setEnabled(has_document and self._submit_thread is None)
        self._delete_action.setEnabled(self._state.selected_field() is not None)
        if has_document:
            self._page_label.setText(f" Page {session.current_page} of {session.page_count} ")
        else:
            self._page_label.setText("")

    def _render_current_page(self) -> None:
        session = self._state.session
        if session.document is None:
            self.canvas.clear_page()
            self._update_actions()
            return

        try:
            image = render_page_image(session.document.handle, session.current_page, scale=session.zoom)
        except PdfRenderError as exc:
            QMessageBox.critical(self, "Render Failed", str(exc))
            return

        self.canvas.set_page(QPixmap.fromImage(image))
        self._update_actions()
        self.statusBar().showMessage(
            f"Page {session.current_page}/{session.page_count} at {int(session.zoom * 100)}%"
        )

    def _close_document(self) -> None:
        self._state.close_document()
        self.canvas.clear_page()
