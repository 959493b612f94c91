"""IRI parsing — tests for absolute IRI validation.

Tests cover:
    - Absolute IRIs accepted unchanged (including non-ASCII and fragments)
    - Relative, empty and malformed text rejected with ValueError
"""

import pytest
from rdflib import URIRef

from reasoner_server.core.iri import parse_iri


@pytest.mark.parametrize("text", [
    "http://example.org/onto",
    "https://ex.org/o1#Thing",
    "urn:isbn:0451450523",
    "http://example.org/onto/café",
    "http://ex.org/o?version=2",
    "file:///tmp/pizza.owl",
])
def test_absolute_iris_parse_unchanged(text):
    iri = parse_iri(text)
    assert isinstance(iri, URIRef)
    assert str(iri) == text


@pytest.mark.parametrize("text", [
    "",
    "example.org/onto",
    "/relative/path",
    "1http://ex.org",
    "http:",
    "http://ex.org/has space",
    "http://ex.org/<bad>",
    "http://ex.org/\x00",
])
def test_invalid_iris_raise_value_error(text):
    with pytest.raises(ValueError):
        parse_iri(text)
