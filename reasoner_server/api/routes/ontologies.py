"""Ontology Routes — read-only listing of loaded ontologies."""

from fastapi import APIRouter, Depends

from reasoner_server.api.reasoner_handler import (
    ReasonerRequestHandler, get_reasoner_handler,
)
from reasoner_server.schemas.reasoner import OntologyListResponse, OntologySummary

router = APIRouter(prefix="/api/v1/ontologies", tags=["ontologies"])


@router.get("", response_model=OntologyListResponse)
async def list_ontologies(
    handler: ReasonerRequestHandler = Depends(get_reasoner_handler),
):
    """Loaded ontologies with their open client counts, sorted by IRI."""
    sessions = sorted(handler.state.ontologies(), key=lambda s: str(s.iri))
    return OntologyListResponse(ontologies=[
        OntologySummary(iri=str(s.iri), clients=s.client_count)
        for s in sessions
    ])
