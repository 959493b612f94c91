"""Request Context — typed extraction and validation of inbound request values.

Invariants:
    - Every extractor raises a ReasonerServerError subclass at the point of detection
    - The ontology IRI is percent-decoded exactly once, as strict UTF-8, from the
      still-encoded request path; it must be absolute
    - Client ids must be canonical 8-4-4-4-12 UUID text
    - Only the FIRST value of a multi-valued header or query parameter is consulted
    - The body stream is closed on every exit path of read_input()
    - Empty required payload is 406 (request well-formed), read failure is 500

Design Decisions:
    - Plain functions over a FastAPI Request: usable from any route or dependency
    - The ASGI server has already decoded scope["path"] (leniently) before routing,
      so the ontology segment is re-matched against scope["raw_path"] with the
      route's own regex and decoded here; without a raw path the routed value is
      used as is
    - A missing, empty or "*/*" Accept falls back to the first registered encoder's
      media type; quality-weighted negotiation over several Accept values is not done
"""

import re
from dataclasses import dataclass
from urllib.parse import quote, unquote
from uuid import UUID

from fastapi import Request

from reasoner_server.core.codec_registry import CodecRegistry
from reasoner_server.core.domain_types import ClientId, OntologyIri
from reasoner_server.core.errors import (
    BadRequestError, EmptyPayloadError, InputReadError,
)
from reasoner_server.core.iri import parse_iri

ONTOLOGY_PARAM = "ontology"
CLIENT_PARAM = "client"

_CANONICAL_UUID = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$",
)
_ANY_MEDIA_TYPE = "*/*"


@dataclass(frozen=True)
class RequestContext:
    """Values resolved from one request, discarded when the response completes."""
    ontology: OntologyIri
    client: ClientId
    accept: str | None
    content_type: str | None
    body: bytes


def _raw_path_param(request: Request, name: str) -> str | None:
    """Still-encoded text of path parameter `name`, or None when it cannot be recovered."""
    regex = getattr(request.scope.get("route"), "path_regex", None)
    raw_path = request.scope.get("raw_path")
    if regex is None or raw_path is None:
        return None
    # some clients and test transports keep the query string in raw_path
    raw = raw_path.decode("latin-1").split("?", 1)[0]
    root = quote(request.scope.get("root_path", ""))
    if root and raw.startswith(root):
        raw = raw[len(root):]
    match = regex.match(raw)
    if match is None:
        return None
    return match.groupdict().get(name)


def get_ontology(request: Request) -> OntologyIri:
    """Ontology IRI from the `ontology` path parameter."""
    try:
        raw = _raw_path_param(request, ONTOLOGY_PARAM)
        if raw is None:
            text = request.path_params[ONTOLOGY_PARAM]
        else:
            text = unquote(raw, encoding="utf-8", errors="strict")
        return parse_iri(text)
    except (KeyError, TypeError, ValueError) as e:
        raise BadRequestError("Error parsing Ontology IRI", field=ONTOLOGY_PARAM) from e


def get_query_parameter(request: Request, name: str) -> str:
    """First value of a required query parameter."""
    values = request.query_params.getlist(name)
    if not values:
        raise BadRequestError(
            f"Missing required query parameter: {name}", field=name,
        )
    value = values[0]
    if not value.strip():
        raise BadRequestError(
            f"Query parameter [{name}] value is empty", field=name,
        )
    return value


def get_client_id(request: Request) -> ClientId:
    """Client id from the required `client` query parameter."""
    text = get_query_parameter(request, CLIENT_PARAM)
    if not _CANONICAL_UUID.match(text):
        raise BadRequestError(
            "Error parsing Client ID - must be a UUID", field=CLIENT_PARAM,
        )
    return ClientId(UUID(text))


def _first_header(request: Request, name: str) -> str | None:
    values = request.headers.getlist(name)
    if values and values[0].strip():
        return values[0]
    return None


def get_accept(request: Request, codecs: CodecRegistry) -> str | None:
    # TODO: negotiate over every Accept value (and q-weights) once encoders advertise more than one type
    value = _first_header(request, "accept")
    if value is None or value.strip() == _ANY_MEDIA_TYPE:
        return codecs.default_encoder_media_type
    return value


def get_content_type(request: Request, codecs: CodecRegistry) -> str | None:
    value = _first_header(request, "content-type")
    if value is None:
        return codecs.default_decoder_media_type
    return value


async def read_input(request: Request, fail_on_empty: bool) -> bytes:
    """Drain the request body into memory.

    Raises InputReadError when the stream fails and EmptyPayloadError when
    ``fail_on_empty`` is set and nothing was sent.
    """
    stream = request.stream()
    chunks: list[bytes] = []
    try:
        try:
            async for chunk in stream:
                chunks.append(chunk)
        finally:
            await stream.aclose()
    except Exception as e:
        raise InputReadError() from e

    body = b"".join(chunks)
    if fail_on_empty and not body:
        raise EmptyPayloadError()
    return body
