"""PDF loading helpers."""

from __future__ import annotations

import logging
import mimetypes
import os
from pathlib import Path
import shutil
import tempfile

import fitz

from formstudio.model.document import PDF_MIME_TYPE, PdfDocument
from formstudio.model.errors import InvalidFileType, PdfLoadError

logger = logging.getLogger(__name__)

_PDF_MAGIC = b"%PDF-"


def declared_type(path: str | Path) -> str | None:
    mime, _ = mimetypes.guess_type(str(path))
    return mime


def ensure_pdf(path: str | Path) -> Path:
    """Reject anything that is not declared and shaped like a PDF."""
    source_path = Path(path)
    if not source_path.exists():
        raise PdfLoadError(f"File not found: {source_path}")
    if declared_type(source_path) != PDF_MIME_TYPE:
        raise InvalidFileType(f"Not a PDF document: {source_path.name}")
    with source_path.open("rb") as handle:
        if handle.read(len(_PDF_MAGIC)) != _PDF_MAGIC:
            raise InvalidFileType(f"Not a PDF document: {source_path.name}")
    return source_path


def load_pdf(path: str | Path) -> PdfDocument:
    source_path = ensure_pdf(path)

    fd, temp_path = tempfile.mkstemp(prefix=".pdf_work_", suffix=".pdf")
    os.close(fd)
    shutil.copy2(source_path, temp_path)

    try:
        handle = fitz.open(temp_path)
    except Exception as exc:  # pragma: no cover - defensive for PyMuPDF errors
        os.remove(temp_path)
        raise PdfLoadError(f"Failed to open PDF: {source_path}") from exc

    logger.info("Loaded %s (%d page(s))", source_path, handle.page_count)
    return PdfDocument(path=source_path, working_path=Path(temp_path), handle=handle)
