"""Package the document and field records for the finishing service."""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import uuid
from typing import Iterable

import httpx

from formstudio.model.document import PDF_MIME_TYPE, PdfDocument
from formstudio.model.errors import MissingDocument, SubmissionRejected, TransportFailure
from formstudio.model.field import Field

logger = logging.getLogger(__name__)

CONNECTIVITY_MESSAGE = "Failed to connect to backend server."


@dataclass(frozen=True, slots=True)
class SubmissionPayload:
    submission_id: str
    filename: str
    document_bytes: bytes
    fields: list[dict[str, object]]

    def fields_json(self) -> str:
        return json.dumps(self.fields)


@dataclass(frozen=True, slots=True)
class SubmissionResult:
    submission_id: str
    signed_pdf_url: str | None


def new_submission_id() -> str:
    return f"doc-{uuid.uuid4().hex}"


def build_payload(document: PdfDocument | None, fields: Iterable[Field]) -> SubmissionPayload:
    """Snapshot the document bytes and field records in store order."""
    if document is None:
        raise MissingDocument("Open a PDF first.")
    return SubmissionPayload(
        submission_id=new_submission_id(),
        filename=document.name,
        document_bytes=document.read_bytes(),
        fields=[item.to_record() for item in fields],
    )


async def submit(
    payload: SubmissionPayload,
    endpoint: str,
    timeout: float = 30.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> SubmissionResult:
    """Send one multipart request; never retried.

    Raises:
        SubmissionRejected: the service answered with ``success: false``.
        TransportFailure: the request failed or the answer could not be read.
    """
    files = {"pdf": (payload.filename, payload.document_bytes, PDF_MIME_TYPE)}
    data = {"pdfId": payload.submission_id, "fields": payload.fields_json()}

    logger.info(
        "Submitting %s with %d field(s) to %s",
        payload.submission_id,
        len(payload.fields),
        endpoint,
    )
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.post(endpoint, data=data, files=files)
        result = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.error("Submission %s failed: %s", payload.submission_id, exc)
        raise TransportFailure(CONNECTIVITY_MESSAGE) from exc

    if not isinstance(result, dict):
        logger.error("Submission %s got an unexpected body", payload.submission_id)
        raise TransportFailure(CONNECTIVITY_MESSAGE)

    if not result.get("success"):
        message = str(result.get("error") or "Unknown error")
        logger.warning("Submission %s rejected: %s", payload.submission_id, message)
        raise SubmissionRejected(message)

    signed_url = result.get("signedPdfUrl")
    logger.info("Submission %s accepted", payload.submission_id)
    return SubmissionResult(
        submission_id=payload.submission_id,
        signed_pdf_url=str(signed_url) if signed_url else None,
    )
