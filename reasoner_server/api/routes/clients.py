"""Client Routes — open and close client sessions on a loaded ontology.

Invariants:
    - The only routes that mutate ServerState
    - Opening returns a fresh client UUID with its own reasoner
    - Closing an unknown client is 404, closing a known one is 204
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status

from reasoner_server.api.reasoner_handler import (
    ReasonerRequestHandler, get_reasoner_handler,
)
from reasoner_server.api.request_context import get_client_id, get_ontology
from reasoner_server.core.errors import ErrorContext, ResourceNotFoundError
from reasoner_server.schemas.reasoner import ClientResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/reasoner", tags=["clients"])


@router.post(
    "/{ontology:path}/clients", response_model=ClientResponse,
    status_code=status.HTTP_201_CREATED,
)
async def open_client(
    request: Request,
    handler: ReasonerRequestHandler = Depends(get_reasoner_handler),
):
    """Open a client session with its own reasoner."""
    iri = get_ontology(request)
    session = handler.get_ontology_session(iri)
    client = session.open_client()
    return ClientResponse(client=client.client_id, ontology=str(iri))


@router.delete(
    "/{ontology:path}/clients", status_code=status.HTTP_204_NO_CONTENT,
)
async def close_client(
    request: Request,
    handler: ReasonerRequestHandler = Depends(get_reasoner_handler),
):
    """Close a client session and drop its reasoner."""
    iri = get_ontology(request)
    client_id = get_client_id(request)
    session = handler.get_ontology_session(iri)
    if not session.close_client(client_id):
        raise ResourceNotFoundError(
            "Client", str(client_id),
            ErrorContext(ontology=str(iri), client=str(client_id)),
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
