"""Error Hierarchy — typed, status-bearing exceptions for every request failure.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
      and the HTTP status written back to the caller
    - Client errors (400-level) are ERROR severity; input read failures are CRITICAL
    - to_response() produces the REST envelope (error_envelope(), also used for
      validation and unhandled failures); the underlying cause stays in
      __cause__ and never reaches the wire
    - Raised only for terminal, caller-visible failures

Design Decisions:
    - Single hierarchy with ReasonerServerError base: one FastAPI handler catches all
    - ErrorContext as dataclass: ontology/client identifiers for logs and responses
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    NEGOTIATION = "negotiation"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Request coordinates attached to an error."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    ontology: str | None = None
    client: str | None = None
    media_type: str | None = None


class ReasonerServerError(Exception):
    """Base exception for all reasoner server errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return error_envelope(
            self.code, self.message, self.category, self.severity, self.context,
        )


def error_envelope(
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    context: ErrorContext | None = None,
    **extra,
) -> dict:
    """REST error envelope shared by domain, validation and catch-all failures."""
    ctx = context or ErrorContext()
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            "timestamp": ctx.timestamp.isoformat(),
            "context": {
                "ontology": ctx.ontology,
                "client": ctx.client,
                "media_type": ctx.media_type,
            },
            **extra,
        }
    }


# ─── Client Errors (400-level) ──────────────────────────────────

class BadRequestError(ReasonerServerError):
    """Malformed or missing request input."""
    def __init__(self, message: str, field: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            message, "BAD_REQUEST", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(ReasonerServerError):
    """Requested ontology or client session does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class EmptyPayloadError(ReasonerServerError):
    """Operation requires a payload but the request body is empty."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Payload is empty",
            "PAYLOAD_EMPTY", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 406,
        )


class NotAcceptableError(ReasonerServerError):
    """No registered encoder produces the requested media type."""
    def __init__(self, media_type: str | None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.media_type = media_type
        super().__init__(
            f"No encoder available for media type: {media_type}",
            "NOT_ACCEPTABLE", ErrorCategory.NEGOTIATION,
            ErrorSeverity.ERROR, ctx, 406,
        )


class UnsupportedMediaTypeError(ReasonerServerError):
    """No registered decoder reads the request's media type."""
    def __init__(self, media_type: str | None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.media_type = media_type
        super().__init__(
            f"No decoder available for media type: {media_type}",
            "UNSUPPORTED_MEDIA_TYPE", ErrorCategory.NEGOTIATION,
            ErrorSeverity.ERROR, ctx, 415,
        )


class ConflictError(ReasonerServerError):
    """Lifecycle operation collides with existing state."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Server Errors (500-level) ──────────────────────────────────

class InputReadError(ReasonerServerError):
    """Reading the request body failed."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "There was an IO error while reading input stream",
            "INPUT_READ_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
