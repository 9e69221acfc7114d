from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from formstudio.model.errors import SubmissionRejected, TransportFailure
from formstudio.model.field import FieldPosition, FieldType
from formstudio.state.store import FieldStore
from formstudio.submission.assembler import (
    CONNECTIVITY_MESSAGE,
    SubmissionPayload,
    new_submission_id,
    submit,
)

ENDPOINT = "http://finisher.test/sign-pdf"


@pytest.fixture
def payload() -> SubmissionPayload:
    store = FieldStore()
    text = store.create(FieldType.TEXT, 1, FieldPosition(0.25, 0.75))
    store.update(text.id, "Jane Doe")
    store.create(FieldType.CHECKBOX, 2, FieldPosition(0.5, 0.5))
    return SubmissionPayload(
        submission_id="doc-123",
        filename="contract.pdf",
        document_bytes=b"%PDF-1.7 test",
        fields=[item.to_record() for item in store],
    )


def _run(payload, handler):
    return asyncio.run(submit(payload, ENDPOINT, timeout=5, transport=httpx.MockTransport(handler)))


def test_success_returns_signed_url(payload):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"success": True, "signedPdfUrl": "http://finisher.test/out.pdf"})

    result = _run(payload, handler)

    assert result.signed_pdf_url == "http://finisher.test/out.pdf"
    assert result.submission_id == "doc-123"
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert request.headers["content-type"].startswith("multipart/form-data")
    body = request.read()
    assert b'name="pdf"; filename="contract.pdf"' in body
    assert b"%PDF-1.7 test" in body
    assert b'name="pdfId"' in body and b"doc-123" in body


def test_fields_are_sent_as_json_records_in_order(payload):
    assert json.loads(payload.fields_json()) == [
        {
            "id": 1,
            "type": "text",
            "page": 1,
            "xPercent": 0.25,
            "yPercent": 0.75,
            "width": 150,
            "height": 40,
            "value": "Jane Doe",
        },
        {
            "id": 2,
            "type": "checkbox",
            "page": 2,
            "xPercent": 0.5,
            "yPercent": 0.5,
            "width": 30,
            "height": 30,
            "value": False,
        },
    ]


def test_rejection_surfaces_service_message(payload):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": False, "error": "Certificate expired"})

    with pytest.raises(SubmissionRejected) as excinfo:
        _run(payload, handler)
    assert excinfo.value.message == "Certificate expired"
    assert str(excinfo.value) == "Certificate expired"


def test_connection_error_is_transport_failure(payload):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(TransportFailure) as excinfo:
        _run(payload, handler)
    assert str(excinfo.value) == CONNECTIVITY_MESSAGE
    assert len(calls) == 1


def test_unparseable_body_is_transport_failure(payload):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>bad gateway</html>")

    with pytest.raises(TransportFailure):
        _run(payload, handler)


def test_submission_ids_are_fresh():
    assert new_submission_id() != new_submission_id()
