"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - OntologyIri is an rdflib URIRef holding an absolute IRI
    - ClientId wraps a UUID; client text is parsed at the request boundary only
"""

from typing import NewType
from uuid import UUID

from rdflib import URIRef


# ─── Identity Types ──────────────────────────────────────────────

OntologyIri = URIRef
ClientId = NewType("ClientId", UUID)
