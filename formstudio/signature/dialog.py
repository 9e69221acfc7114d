"""Modal signature capture dialog."""

from __future__ import annotations

import logging
from typing import Callable

from PySide6.QtCore import QEvent, QPointF, Qt
from PySide6.QtGui import QPainter
from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QMessageBox,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from formstudio.model.errors import EmptySignature
from formstudio.signature.surface import PAD_HEIGHT, SignatureSurface

logger = logging.getLogger(__name__)


class SignaturePadWidget(QWidget):
    def __init__(self, width: int, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.surface = SignatureSurface(width, PAD_HEIGHT)
        self.setAttribute(Qt.WidgetAttribute.WA_AcceptTouchEvents, True)
        self.setCursor(Qt.CursorShape.CrossCursor)
        self.setFixedHeight(PAD_HEIGHT)
        self.setMinimumWidth(200)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)

    def paintEvent(self, event) -> None:  # type: ignore[override]
        del event
        painter = QPainter(self)
        painter.drawImage(0, 0, self.surface.image)

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        self.surface.resize(event.size().width())
        super().resizeEvent(event)

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        if event.button() != Qt.MouseButton.LeftButton:
            return
        self._begin(event.position())

    def mouseMoveEvent(self, event) -> None:  # type: ignore[override]
        self._extend(event.position())

    def mouseReleaseEvent(self, event) -> None:  # type: ignore[override]
        del event
        self.surface.end_stroke()

    def leaveEvent(self, event) -> None:  # type: ignore[override]
        self.surface.end_stroke()
        super().leaveEvent(event)

    def event(self, event) -> bool:  # type: ignore[override]
        kind = event.type()
        if kind in (QEvent.Type.TouchBegin, QEvent.Type.TouchUpdate, QEvent.Type.TouchEnd):
            points = event.points()
            if kind == QEvent.Type.TouchEnd or not points:
                self.surface.end_stroke()
            elif kind == QEvent.Type.TouchBegin:
                self._begin(points[0].position())
            else:
                self._extend(points[0].position())
            event.accept()
            return True
        return super().event(event)

    def clear(self) -> None:
        self.surface.clear()
        self.update()

    def _begin(self, pos: QPointF) -> None:
        self.surface.begin_stroke(pos.x(), pos.y())
        self.update()

    def _extend(self, pos: QPointF) -> None:
        # Moves outside the pad end the stroke; the press grab still delivers them.
        if not self.rect().contains(pos.toPoint()):
            self.surface.end_stroke()
            return
        if self.surface.extend_stroke(pos.x(), pos.y()):
            self.update()


class SignatureDialog(QDialog):
    """Collects one signature and hands a PNG data URI to ``on_save``."""

    DEFAULT_WIDTH = 512

    def __init__(
        self,
        on_save: Callable[[str], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Add Signature")
        self.setModal(True)
        self._on_save = on_save

        self.pad = SignaturePadWidget(self.DEFAULT_WIDTH)

        clear_button = QPushButton("Clear Pad")
        clear_button.clicked.connect(self.pad.clear)
        cancel_button = QPushButton("Cancel")
        cancel_button.clicked.connect(self.reject)
        apply_button = QPushButton("Apply Signature")
        apply_button.setDefault(True)
        apply_button.clicked.connect(self.save_signature)

        buttons = QHBoxLayout()
        buttons.addWidget(clear_button)
        buttons.addStretch(1)
        buttons.addWidget(cancel_button)
        buttons.addWidget(apply_button)

        layout = QVBoxLayout(self)
        layout.addWidget(QLabel("Sign inside the box"))
        layout.addWidget(self.pad)
        layout.addLayout(buttons)

        self.resize(self.DEFAULT_WIDTH + 40, PAD_HEIGHT + 100)

    @property
    def is_empty(self) -> bool:
        return self.pad.surface.empty

    def save_signature(self) -> bool:
        try:
            data_uri = self.pad.surface.save()
        except EmptySignature as exc:
            self._notify_empty(str(exc))
            return False
        self._on_save(data_uri)
        logger.info("Signature captured (%d bytes)", len(data_uri))
        self.accept()
        return True

    def _notify_empty(self, message: str) -> None:
        QMessageBox.information(self, "Signature", message)
