"""Loaded PDF document and the resources held while it is on screen."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path

import fitz

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"


@dataclass(slots=True)
class PdfDocument:
    path: Path
    working_path: Path
    handle: fitz.Document

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def page_count(self) -> int:
        return self.handle.page_count

    @property
    def is_closed(self) -> bool:
        return self.handle.is_closed

    def read_bytes(self) -> bytes:
        return self.working_path.read_bytes()

    def close(self) -> None:
        if not self.handle.is_closed:
            self.handle.close()
        if self.working_path != self.path and self.working_path.exists():
            try:
                os.remove(self.working_path)
            except OSError as exc:
                logger.warning("Could not remove working copy %s: %s", self.working_path, exc)
        logger.debug("Released document %s", self.path)

    def __enter__(self) -> PdfDocument:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
