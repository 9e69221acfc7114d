"""Free-hand signature surface backed by a persistent raster image."""

from __future__ import annotations

import base64

from PySide6.QtCore import QBuffer, QByteArray, QIODevice, QPointF, Qt
from PySide6.QtGui import QColor, QImage, QPainter, QPen

from formstudio.model.errors import EmptySignature

PAD_HEIGHT = 200
STROKE_WIDTH = 2.0


class SignatureSurface:
    """Strokes are painted straight into a ``QImage``.

    There is no stroke list: once a segment is drawn it is part of the pixels,
    which is exactly what gets exported.
    """

    def __init__(self, width: int, height: int = PAD_HEIGHT) -> None:
        self._image = self._blank(max(1, width), height)
        self.empty = True
        self.drawing = False
        self._last_point: QPointF | None = None

    @property
    def image(self) -> QImage:
        return self._image

    @property
    def width(self) -> int:
        return self._image.width()

    @property
    def height(self) -> int:
        return self._image.height()

    def begin_stroke(self, x: float, y: float) -> None:
        self.drawing = True
        self.empty = False
        self._last_point = QPointF(x, y)
        self._paint_segment(self._last_point, self._last_point)

    def extend_stroke(self, x: float, y: float) -> bool:
        if not self.drawing or self._last_point is None:
            return False
        point = QPointF(x, y)
        self._paint_segment(self._last_point, point)
        self._last_point = point
        return True

    def end_stroke(self) -> None:
        self.drawing = False
        self._last_point = None

    def clear(self) -> None:
        self._image.fill(QColor("white"))
        self.empty = True
        self.end_stroke()

    def resize(self, width: int) -> None:
        """Re-measure to a new width, keeping the pixels already drawn."""
        width = max(1, width)
        if width == self._image.width():
            return
        resized = self._blank(width, self._image.height())
        painter = QPainter(resized)
        painter.drawImage(0, 0, self._image)
        painter.end()
        self._image = resized

    def to_png_bytes(self) -> bytes:
        data = QByteArray()
        buffer = QBuffer(data)
        buffer.open(QIODevice.OpenModeFlag.WriteOnly)
        self._image.save(buffer, "PNG")
        buffer.close()
        return bytes(data.data())

    def to_data_uri(self) -> str:
        encoded = base64.b64encode(self.to_png_bytes()).decode("ascii")
        return f"data:image/png;base64,{encoded}"

    def save(self) -> str:
        if self.empty:
            raise EmptySignature("Please sign before saving.")
        return self.to_data_uri()

    def _paint_segment(self, start: QPointF, end: QPointF) -> None:
        painter = QPainter(self._image)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        pen = QPen(QColor("black"))
        pen.setWidthF(STROKE_WIDTH)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        painter.setPen(pen)
        painter.drawLine(start, end)
        painter.end()

    @staticmethod
    def _blank(width: int, height: int) -> QImage:
        image = QImage(width, height, QImage.Format.Format_RGB32)
        image.fill(QColor("white"))
        return image
