"""Error types raised by the editor core and handled at the user action."""

from __future__ import annotations


class FormStudioError(RuntimeError):
    """Base class for recoverable editor errors."""


class InvalidFileType(FormStudioError):
    """Raised when a selected input file is not a PDF document."""


class PdfLoadError(FormStudioError):
    """Raised when a PDF cannot be opened."""


class PdfRenderError(FormStudioError):
    """Raised when a page cannot be rendered."""


class InvalidFieldValue(FormStudioError):
    """Raised when a value does not match the field type's representation."""


class EmptySignature(FormStudioError):
    """Raised when saving a signature pad that has no strokes."""


class MissingDocument(FormStudioError):
    """Raised when a submission is requested without a loaded document."""


class SubmissionRejected(FormStudioError):
    """Raised when the finishing service reports a failure."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TransportFailure(FormStudioError):
    """Raised when the finishing service cannot be reached or answers garbage."""
