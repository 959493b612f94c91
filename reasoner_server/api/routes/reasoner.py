"""Reasoner Routes — one endpoint per reasoner operation.

Invariants:
    - Every endpoint runs ReasonerRequestHandler.prepare() before touching the reasoner
    - Payload-carrying endpoints require a non-empty body (406 otherwise)
    - Results of query/explain are encoded with the encoder negotiated from Accept
    - Update and classify endpoints answer 204 with no body

Design Decisions:
    - {ontology:path} lets percent-decoded IRIs keep their slashes while matching
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response, status

from reasoner_server.api.reasoner_handler import (
    ReasonerRequestHandler, get_reasoner_handler,
)
from reasoner_server.schemas.reasoner import VersionResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/reasoner", tags=["reasoner"])


@router.post("/{ontology:path}/query")
async def query(
    request: Request,
    handler: ReasonerRequestHandler = Depends(get_reasoner_handler),
):
    """Answer a query against the client's reasoner."""
    invocation = await handler.prepare(request)
    result = await handler.invoke(
        invocation, invocation.reasoner.query, invocation.payload,
    )
    return handler.respond(invocation, result)


@router.post("/{ontology:path}/explain")
async def explain(
    request: Request,
    limit: int = Query(0, ge=0),
    handler: ReasonerRequestHandler = Depends(get_reasoner_handler),
):
    """Explain an entailment; limit=0 asks for every explanation."""
    invocation = await handler.prepare(request)
    result = await handler.invoke(
        invocation, invocation.reasoner.explain, invocation.payload, limit,
    )
    return handler.respond(invocation, result)


@router.post("/{ontology:path}/insert", status_code=status.HTTP_204_NO_CONTENT)
async def insert(
    request: Request,
    handler: ReasonerRequestHandler = Depends(get_reasoner_handler),
):
    """Add axioms to the client's view of the ontology."""
    invocation = await handler.prepare(request, needs_encoder=False)
    await handler.invoke(
        invocation, invocation.reasoner.insert, invocation.payload,
    )
    logger.info(
        "Axioms inserted",
        extra={
            "ontology": str(invocation.context.ontology),
            "client": str(invocation.context.client),
            "operation": "insert",
        },
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{ontology:path}/delete", status_code=status.HTTP_204_NO_CONTENT)
async def delete(
    request: Request,
    handler: ReasonerRequestHandler = Depends(get_reasoner_handler),
):
    """Remove axioms from the client's view of the ontology."""
    invocation = await handler.prepare(request, needs_encoder=False)
    await handler.invoke(
        invocation, invocation.reasoner.delete, invocation.payload,
    )
    logger.info(
        "Axioms deleted",
        extra={
            "ontology": str(invocation.context.ontology),
            "client": str(invocation.context.client),
            "operation": "delete",
        },
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{ontology:path}/classify", status_code=status.HTTP_204_NO_CONTENT)
async def classify(
    request: Request,
    handler: ReasonerRequestHandler = Depends(get_reasoner_handler),
):
    invocation = await handler.prepare(
        request, read_body=False, needs_encoder=False,
    )
    await handler.invoke(invocation, invocation.reasoner.classify)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{ontology:path}/version", response_model=VersionResponse)
async def version(
    request: Request,
    handler: ReasonerRequestHandler = Depends(get_reasoner_handler),
):
    invocation = await handler.prepare(
        request, read_body=False, needs_encoder=False,
    )
    current = await handler.invoke(invocation, invocation.reasoner.version)
    return VersionResponse(version=current)
