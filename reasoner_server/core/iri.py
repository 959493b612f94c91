"""IRI Parsing — validates absolute IRIs used as ontology identifiers.

Invariants:
    - Only absolute IRIs are accepted (RFC 3987 scheme followed by ':')
    - Whitespace, control characters and the delimiters forbidden in IRIs are rejected
    - Parsing never alters the text: str(parse_iri(s)) == s for every accepted s
"""

import re

from reasoner_server.core.domain_types import OntologyIri

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
_FORBIDDEN = frozenset('<>"{}|\\^`')


def parse_iri(text: str) -> OntologyIri:
    """Parse text as an absolute IRI. Raises ValueError when invalid."""
    if not text or not _SCHEME.match(text):
        raise ValueError(f"Not an absolute IRI: {text!r}")
    for ch in text:
        if ch in _FORBIDDEN or ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F:
            raise ValueError(f"Invalid character {ch!r} in IRI: {text!r}")
    if len(text) == _SCHEME.match(text).end():
        raise ValueError(f"IRI has no hierarchical part: {text!r}")
    return OntologyIri(text)
