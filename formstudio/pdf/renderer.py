"""Page rasterization using PyMuPDF."""

from __future__ import annotations

import fitz
from PySide6.QtGui import QImage

from formstudio.model.errors import PdfRenderError


def render_page_image(document: fitz.Document, page: int, scale: float = 1.0) -> QImage:
    """Render a 1-based page number at the given zoom scale."""
    if page < 1 or page > document.page_count:
        raise PdfRenderError(f"Page out of range: {page}")

    try:
        pdf_page = document.load_page(page - 1)
        matrix = fitz.Matrix(scale, scale)
        pix = pdf_page.get_pixmap(matrix=matrix, alpha=False, annots=False)
    except Exception as exc:  # pragma: no cover - defensive for PyMuPDF errors
        raise PdfRenderError(f"Failed to render page {page}") from exc

    image = QImage(pix.samples, pix.width, pix.height, pix.stride, QImage.Format.Format_RGB888)
    return image.copy()
