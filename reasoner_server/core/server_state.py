"""Server State — process-wide directory of loaded ontologies and their client sessions.

Invariants:
    - At most one OntologySession per ontology IRI; keys are always URIRef, so
      plain-string IRIs from callers resolve to the same entry
    - At most one ClientSession per (ontology IRI, client id)
    - A ClientSession's reasoner is never shared with another client
    - Readers never lock: both levels publish immutable snapshots (MappingProxyType)
      that writers replace atomically under a lock
    - The request path only reads (get_ontology / get_client); load/unload and
      open/close are lifecycle operations

Design Decisions:
    - Snapshot swap over read-write lock: readers in asyncio tasks and worker
      threads see either the old or the new mapping, never a partial update
    - ClientSession serializes calls into its reasoner with its own lock
"""

import logging
import threading
from types import MappingProxyType
from typing import Any, Callable, Mapping, TypeVar
from uuid import UUID, uuid4

from reasoner_server.core.domain_types import ClientId, OntologyIri
from reasoner_server.core.errors import (
    ConflictError, ErrorContext, ResourceNotFoundError,
)
from reasoner_server.core.reasoner_protocols import ReasonerFactory, SchemaReasoner

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class ClientSession:
    """Reasoning handle — one reasoner bound to one client's view of one ontology."""

    def __init__(self, client_id: ClientId, reasoner: SchemaReasoner):
        self.client_id = client_id
        self._reasoner = reasoner
        self._lock = threading.Lock()

    @property
    def reasoner(self) -> SchemaReasoner:
        return self._reasoner

    def call(self, fn: Callable[..., _T], *args: Any) -> _T:
        """Run fn while holding this client's reasoner lock."""
        with self._lock:
            return fn(*args)


class OntologySession:
    """Client sessions for one loaded ontology."""

    def __init__(self, iri: OntologyIri, reasoner_factory: ReasonerFactory):
        self.iri = iri
        self._reasoner_factory = reasoner_factory
        self._clients: Mapping[str, ClientSession] = MappingProxyType({})
        self._write_lock = threading.Lock()

    def get_client(self, client_id: str) -> ClientSession | None:
        return self._clients.get(client_id)

    @property
    def client_count(self) -> int:
        return len(self._clients)

    def open_client(self, client_id: UUID | None = None) -> ClientSession:
        """Create a client session with a fresh reasoner. Raises ConflictError on duplicate id."""
        cid = ClientId(client_id or uuid4())
        with self._write_lock:
            if str(cid) in self._clients:
                raise ConflictError(
                    f"Client already registered: {cid}",
                    ErrorContext(ontology=str(self.iri), client=str(cid)),
                )
            client = ClientSession(cid, self._reasoner_factory())
            clients = dict(self._clients)
            clients[str(cid)] = client
            self._clients = MappingProxyType(clients)
        logger.info(
            f"Client opened: {cid}",
            extra={"ontology": str(self.iri), "client": str(cid)},
        )
        return client

    def close_client(self, client_id: UUID) -> bool:
        """Drop a client session. Returns False when it did not exist."""
        with self._write_lock:
            if str(client_id) not in self._clients:
                return False
            clients = dict(self._clients)
            del clients[str(client_id)]
            self._clients = MappingProxyType(clients)
        logger.info(
            f"Client closed: {client_id}",
            extra={"ontology": str(self.iri), "client": str(client_id)},
        )
        return True


class ServerState:
    """Registry of loaded ontologies, keyed by IRI."""

    def __init__(self):
        self._ontologies: Mapping[OntologyIri, OntologySession] = MappingProxyType({})
        self._write_lock = threading.Lock()

    def get_ontology(self, iri: OntologyIri) -> OntologySession | None:
        return self._ontologies.get(OntologyIri(iri))

    def ontologies(self) -> list[OntologySession]:
        return list(self._ontologies.values())

    def load_ontology(
        self, iri: OntologyIri, reasoner_factory: ReasonerFactory,
    ) -> OntologySession:
        """Register an ontology. Raises ConflictError when it is already loaded."""
        iri = OntologyIri(iri)
        with self._write_lock:
            if iri in self._ontologies:
                raise ConflictError(
                    f"Ontology already loaded: {iri}",
                    ErrorContext(ontology=str(iri)),
                )
            session = OntologySession(iri, reasoner_factory)
            ontologies = dict(self._ontologies)
            ontologies[iri] = session
            self._ontologies = MappingProxyType(ontologies)
        logger.info(f"Ontology loaded: {iri}", extra={"ontology": str(iri)})
        return session

    def unload_ontology(self, iri: OntologyIri) -> OntologySession | None:
        """Drop an ontology and all its client sessions."""
        iri = OntologyIri(iri)
        with self._write_lock:
            ontologies = dict(self._ontologies)
            session = ontologies.pop(iri, None)
            self._ontologies = MappingProxyType(ontologies)
        if session is not None:
            logger.info(f"Ontology unloaded: {iri}", extra={"ontology": str(iri)})
        return session


# ─── Request-path lookups ────────────────────────────────────────

def resolve_ontology(state: ServerState, iri: OntologyIri) -> OntologySession:
    """Loaded session for iri. Raises ResourceNotFoundError otherwise."""
    session = state.get_ontology(iri)
    if session is None:
        raise ResourceNotFoundError(
            "Ontology", str(iri), ErrorContext(ontology=str(iri)),
        )
    return session


def resolve_client(session: OntologySession, client_id: ClientId) -> ClientSession:
    """Client's reasoning handle under session. Raises ResourceNotFoundError otherwise."""
    client = session.get_client(str(client_id))
    if client is None:
        raise ResourceNotFoundError(
            "Client", str(client_id),
            ErrorContext(ontology=str(session.iri), client=str(client_id)),
        )
    return client
