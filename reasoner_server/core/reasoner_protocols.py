"""Boundary Protocols — contracts between the request core and its collaborators.

Invariants:
    - Core NEVER implements reasoning or byte formats, it only calls these contracts
    - Reasoners are obtained from a factory bound to one loaded ontology
    - Codecs advertise capability with supports(), not with a fixed list

Design Decisions:
    - Protocol over ABC: structural subtyping, collaborators need no base class
    - Reasoner methods are synchronous; the shell offloads them to worker threads
"""

from typing import Any, Callable, Protocol


class SchemaReasoner(Protocol):
    """Contract for a reasoner bound to one client's view of one ontology."""
    def query(self, query: Any) -> Any: ...
    def explain(self, query: Any, limit: int) -> Any: ...
    def insert(self, axioms: Any) -> None: ...
    def delete(self, axioms: Any) -> None: ...
    def classify(self) -> None: ...
    def version(self) -> int: ...


ReasonerFactory = Callable[[], SchemaReasoner]


class Encoder(Protocol):
    """Contract for turning a reasoner result into response bytes."""
    media_type: str

    def supports(self, media_type: str) -> bool: ...
    def encode(self, value: Any) -> bytes: ...


class Decoder(Protocol):
    """Contract for turning request bytes into a reasoner input."""
    media_type: str

    def supports(self, media_type: str) -> bool: ...
    def decode(self, data: bytes, media_type: str) -> Any: ...
