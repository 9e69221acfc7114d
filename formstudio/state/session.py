"""In-memory document session: the open PDF, page index and zoom."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from formstudio.model.document import PdfDocument

logger = logging.getLogger(__name__)

MIN_ZOOM = 0.25
MAX_ZOOM = 4.0
ZOOM_STEP = 0.25


def clamp_zoom(scale: float) -> float:
    return max(MIN_ZOOM, min(MAX_ZOOM, scale))


@dataclass(slots=True)
class DocumentSession:
    document: PdfDocument | None = None
    page_count: int = 0
    current_page: int = 1
    zoom: float = 1.0

    @property
    def has_document(self) -> bool:
        return self.document is not None

    def replace_document(self, document: PdfDocument) -> None:
        """Swap in a new document, releasing the one it replaces."""
        self.close_document()
        self.document = document
        self.page_count = document.page_count
        self.current_page = 1

    def close_document(self) -> None:
        if self.document is not None:
            self.document.close()
            logger.info("Closed %s", self.document.path)
        self.document = None
        self.page_count = 0
        self.current_page = 1

    def go_to_page(self, page: int) -> int:
        upper = max(1, self.page_count)
        self.current_page = max(1, min(page, upper))
        return self.current_page

    def next_page(self) -> int:
        return self.go_to_page(self.current_page + 1)

    def previous_page(self) -> int:
        return self.go_to_page(self.current_page - 1)

    def set_zoom(self, scale: float) -> float:
        self.zoom = clamp_zoom(scale)
        return self.zoom

    def zoom_in(self) -> float:
        return self.set_zoom(self.zoom + ZOOM_STEP)

    def zoom_out(self) -> float:
        return self.set_zoom(self.zoom - ZOOM_STEP)
