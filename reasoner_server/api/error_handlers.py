"""Error Handlers — global exception handlers for the reasoner API.

Invariants:
    - ReasonerServerError → its http_status with the structured JSON envelope
    - RequestValidationError → 400 with field-level error details
    - Exception (catch-all) → 500, never leaks internal details or stack traces
    - Every failure is logged once, here, with the request path

Design Decisions:
    - Three-layer handler: domain (ReasonerServerError), validation (Pydantic), catch-all
    - All three layers write the same envelope shape via error_envelope()
    - Client errors log at WARNING, server errors at ERROR with the cause chain
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from reasoner_server.core.errors import (
    ErrorCategory, ErrorContext, ErrorSeverity, ReasonerServerError, error_envelope,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_reasoner_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_reasoner_error_handler(app: FastAPI) -> None:
    """Register request-failure handler."""

    @app.exception_handler(ReasonerServerError)
    async def reasoner_error_handler(request: Request, exc: ReasonerServerError):
        """Write the status and envelope carried by the error."""
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "status": exc.http_status,
            "ontology": exc.context.ontology,
            "client": exc.context.client,
        }
        if exc.http_status >= 500:
            logger.error(
                f"ReasonerServerError: {exc.message}",
                extra=extra, exc_info=exc,
            )
        else:
            logger.warning(f"ReasonerServerError: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path, "status": 400},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(request, exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            extra={"path": request.url.path, "status": 500},
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_envelope(
                "INTERNAL_ERROR", "An unexpected error occurred",
                ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
                _request_context(request),
            ),
        )


def _request_context(request: Request) -> ErrorContext:
    """Unvalidated request coordinates, for envelopes raised outside the handler."""
    return ErrorContext(
        ontology=request.path_params.get("ontology"),
        client=request.query_params.get("client"),
    )


def _build_validation_error_response(
    request: Request, exc: RequestValidationError,
) -> dict:
    """Build structured validation error response."""
    return error_envelope(
        "VALIDATION_ERROR", "Invalid request data",
        ErrorCategory.VALIDATION, ErrorSeverity.ERROR,
        _request_context(request),
        details=[
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ],
    )
