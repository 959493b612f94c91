"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 until at least one encoder and one decoder are registered
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from reasoner_server.api.reasoner_handler import (
    ReasonerRequestHandler, get_reasoner_handler,
)
from reasoner_server.config import get_settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": settings.service_name,
        "version": settings.service_version,
    }


@router.get("/ready")
async def readiness_check(
    handler: ReasonerRequestHandler = Depends(get_reasoner_handler),
):
    """Readiness probe: codecs registered, ontologies counted."""
    codecs = handler.codecs
    if not codecs.encoders or not codecs.decoders:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "codecs_unavailable",
            },
        )
    return {
        "status": "ready",
        "checks": {
            "encoders": len(codecs.encoders),
            "decoders": len(codecs.decoders),
            "ontologies": len(handler.state.ontologies()),
        },
    }
