"""Reasoner Schemas — Pydantic response models for the JSON endpoints.

Invariants:
    - Identifiers serialized as text: IRIs as str, client ids as canonical UUID
    - Reasoner results themselves never pass through these models (codecs own them)
"""

from uuid import UUID

from pydantic import BaseModel, Field


class ClientResponse(BaseModel):
    """Newly opened client session."""
    client: UUID
    ontology: str


class VersionResponse(BaseModel):
    """Version of the client's view of the ontology."""
    version: int


class OntologySummary(BaseModel):
    iri: str
    clients: int = Field(ge=0)


class OntologyListResponse(BaseModel):
    ontologies: list[OntologySummary]
