"""Request builders shared by the API tests."""

import re
from types import SimpleNamespace
from urllib.parse import quote, unquote
from uuid import UUID

from fastapi import Request

ONTOLOGY = "http://ex.org/o1"
CLIENT_ID = UUID("3fa85f64-5717-4562-b3fc-2c963f66afa6")

# Same shape as the regex Starlette compiles for "/test/{ontology:path}/query"
_TEST_ROUTE = SimpleNamespace(
    path_regex=re.compile(r"^/test/(?P<ontology>.*)/query$"),
)


def reasoner_url(operation, ontology=ONTOLOGY, client=CLIENT_ID):
    url = f"/api/v1/reasoner/{quote(ontology, safe='')}/{operation}"
    if client is not None:
        url += f"?client={client}"
    return url


def make_request(
    path_params=None, query_string=b"", headers=(), body=b"", receive=None,
    encoded_ontology=None,
):
    """Build a FastAPI Request from a raw ASGI scope.

    With ``encoded_ontology`` the scope looks like a routed request: the raw
    path keeps the percent-encoding, while ``path`` and ``path_params`` hold the
    server's lenient decode of it.
    """
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/test",
        "query_string": query_string,
        "headers": [
            (k.lower().encode("latin-1"), v.encode("latin-1"))
            for k, v in headers
        ],
        "path_params": path_params or {},
    }
    if encoded_ontology is not None:
        decoded = unquote(encoded_ontology, errors="replace")
        scope["path"] = f"/test/{decoded}/query"
        scope["raw_path"] = f"/test/{encoded_ontology}/query".encode("latin-1")
        scope["route"] = _TEST_ROUTE
        scope["path_params"] = {"ontology": decoded}

    async def _receive():
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive or _receive)
