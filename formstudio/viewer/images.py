"""Conversions between raster images and data URIs."""

from __future__ import annotations

import base64
import binascii
import mimetypes
from pathlib import Path

from PySide6.QtGui import QImage, QPixmap

from formstudio.model.errors import InvalidFileType

IMAGE_FILTER = "Images (*.png *.jpg *.jpeg *.gif *.bmp *.webp)"


def image_file_to_data_uri(path: str | Path) -> str:
    source = Path(path)
    mime, _ = mimetypes.guess_type(str(source))
    if mime is None or not mime.startswith("image/"):
        raise InvalidFileType(f"Not an image: {source.name}")
    data = source.read_bytes()
    if not QImage().loadFromData(data):
        raise InvalidFileType(f"Not a readable image: {source.name}")
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def data_uri_to_bytes(data_uri: str) -> bytes:
    header, _, payload = data_uri.partition(",")
    if not header.startswith("data:") or not header.endswith(";base64"):
        raise ValueError("Unsupported data URI")
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as exc:
        raise ValueError("Malformed base64 payload") from exc


def data_uri_to_pixmap(data_uri: str) -> QPixmap:
    pixmap = QPixmap()
    if data_uri:
        pixmap.loadFromData(data_uri_to_bytes(data_uri))
    return pixmap
