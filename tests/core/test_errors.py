"""Error hierarchy — tests for status codes, codes and the REST envelope.

Tests cover:
    - Each request failure maps to its HTTP status
    - to_response() carries code, message, category, severity and context
    - NotAcceptable/UnsupportedMediaType record the offending media type
    - error_envelope() builds the same shape without an exception, plus extras
"""

import pytest

from reasoner_server.core.errors import (
    BadRequestError, ConflictError, EmptyPayloadError, ErrorCategory,
    ErrorContext, ErrorSeverity, InputReadError, NotAcceptableError,
    ReasonerServerError, ResourceNotFoundError, UnsupportedMediaTypeError,
    error_envelope,
)


@pytest.mark.parametrize("error, status", [
    (BadRequestError("bad"), 400),
    (ResourceNotFoundError("Ontology", "http://ex.org/o"), 404),
    (EmptyPayloadError(), 406),
    (NotAcceptableError("application/xml"), 406),
    (ConflictError("dup"), 409),
    (UnsupportedMediaTypeError("application/xml"), 415),
    (InputReadError(), 500),
])
def test_errors_carry_http_status(error, status):
    assert isinstance(error, ReasonerServerError)
    assert error.http_status == status


def test_not_found_message_names_resource():
    err = ResourceNotFoundError("Ontology", "http://example.org/onto")
    assert err.message == "Ontology not found: http://example.org/onto"
    assert err.category == ErrorCategory.RESOURCE_NOT_FOUND


def test_input_read_error_is_critical():
    err = InputReadError()
    assert err.severity == ErrorSeverity.CRITICAL
    assert err.code == "INPUT_READ_ERROR"


def test_empty_payload_message():
    assert EmptyPayloadError().message == "Payload is empty"


def test_to_response_envelope():
    err = BadRequestError(
        "Missing required query parameter: client", field="client",
        context=ErrorContext(ontology="http://ex.org/o1"),
    )
    body = err.to_response()["error"]
    assert body["code"] == "BAD_REQUEST"
    assert body["message"] == "Missing required query parameter: client"
    assert body["category"] == "validation"
    assert body["severity"] == "error"
    assert body["context"]["ontology"] == "http://ex.org/o1"
    assert body["context"]["client"] is None
    assert "timestamp" in body
    assert err.field == "client"


def test_negotiation_errors_record_media_type():
    assert NotAcceptableError("text/csv").context.media_type == "text/csv"
    assert UnsupportedMediaTypeError("text/csv").to_response()["error"]["context"]["media_type"] == "text/csv"


def test_error_envelope_without_exception():
    body = error_envelope(
        "VALIDATION_ERROR", "Invalid request data",
        ErrorCategory.VALIDATION, ErrorSeverity.ERROR,
        details=[{"field": "query.limit"}],
    )["error"]
    assert body["context"] == {"ontology": None, "client": None, "media_type": None}
    assert body["details"] == [{"field": "query.limit"}]
    assert set(body) >= {"code", "message", "category", "severity", "timestamp"}
