"""API test fixtures — app wired with fake codecs and reasoner + async test client.

Invariants:
    - Every test gets a fresh ServerState with one loaded ontology and one open client
    - JSON is the first registered encoder/decoder, so it is the default media type
    - The test client does not re-raise app exceptions: catch-all 500s are observable
"""

import pytest
from httpx import ASGITransport, AsyncClient
from rdflib import URIRef

from reasoner_server.core.codec_registry import CodecRegistry
from reasoner_server.core.server_state import ServerState
from reasoner_server.main import create_app
from tests.api.helpers import CLIENT_ID, ONTOLOGY
from tests.fakes import FakeReasoner, JsonCodec, TextCodec


@pytest.fixture
def codecs():
    return CodecRegistry(
        encoders=[JsonCodec(), TextCodec()],
        decoders=[JsonCodec(), TextCodec()],
    )


@pytest.fixture
def server_state():
    state = ServerState()
    session = state.load_ontology(URIRef(ONTOLOGY), FakeReasoner)
    session.open_client(CLIENT_ID)
    return state


@pytest.fixture
def reasoner(server_state):
    """The FakeReasoner behind the fixture client."""
    return server_state.get_ontology(URIRef(ONTOLOGY)).get_client(str(CLIENT_ID)).reasoner


@pytest.fixture
def app(server_state, codecs):
    return create_app(server_state, codecs)


@pytest.fixture
async def client(app):
    """FastAPI test client over the in-process app."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c
