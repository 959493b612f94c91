"""Reasoner Request Handler — shared preamble every reasoning endpoint runs through.

Invariants:
    - prepare() either returns a complete ReasonerInvocation or raises a
      ReasonerServerError; nothing is written to the response before that
    - Lookups only read ServerState; no request creates or removes sessions
    - The session is resolved before the body is read: 404 wins over 406
    - Responses carry the encoder's own media type, never the raw Accept text
    - Exactly one ClientSession per invocation; handles are never pooled
    - Reasoner calls go through ClientSession.call(), serialized per client

Design Decisions:
    - Endpoint routes are the collaborators: they call invoke() with the reasoner
      method they need and respond() with its result
    - One handler instance per app, built by create_app()
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from fastapi import Request, Response

from reasoner_server.api.request_context import (
    RequestContext, get_accept, get_client_id, get_content_type, get_ontology,
    read_input,
)
from reasoner_server.core.codec_registry import CodecRegistry
from reasoner_server.core.domain_types import ClientId, OntologyIri
from reasoner_server.core.errors import (
    BadRequestError, ErrorContext, NotAcceptableError, UnsupportedMediaTypeError,
)
from reasoner_server.core.reasoner_protocols import Decoder, Encoder, SchemaReasoner
from reasoner_server.core.server_state import (
    ClientSession, OntologySession, ServerState, resolve_client, resolve_ontology,
)

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


@dataclass
class ReasonerInvocation:
    """Everything an endpoint needs to call the reasoner and encode the result."""
    context: RequestContext
    client: ClientSession
    payload: Any = None
    encoder: Encoder | None = None

    @property
    def reasoner(self) -> SchemaReasoner:
        return self.client.reasoner


class ReasonerRequestHandler:
    """Resolves reasoner, input and encoder for a request."""

    def __init__(
        self, state: ServerState, codecs: CodecRegistry,
        thread_offload: bool = True,
    ):
        self._state = state
        self._codecs = codecs
        self._thread_offload = thread_offload

    @property
    def state(self) -> ServerState:
        return self._state

    @property
    def codecs(self) -> CodecRegistry:
        return self._codecs

    def get_encoder(self, media_type: str | None) -> Encoder | None:
        return self._codecs.find_encoder(media_type)

    def get_decoder(self, media_type: str | None) -> Decoder | None:
        return self._codecs.find_decoder(media_type)

    def get_ontology_session(self, iri: OntologyIri) -> OntologySession:
        return resolve_ontology(self._state, iri)

    def get_client(self, iri: OntologyIri, client_id: ClientId) -> ClientSession:
        return resolve_client(self.get_ontology_session(iri), client_id)

    async def prepare(
        self, request: Request, *,
        read_body: bool = True,
        fail_on_empty: bool = True,
        needs_encoder: bool = True,
    ) -> ReasonerInvocation:
        """Resolve the client session, negotiate codecs and read the payload.

        Order matters: identifiers and headers are parsed first, the session is
        resolved next (404), and only then is the body read and decoded, so an
        unknown ontology or client is reported before any payload problem.
        """
        ontology = get_ontology(request)
        client_id = get_client_id(request)
        accept = get_accept(request, self._codecs)
        content_type = get_content_type(request, self._codecs)
        client = self.get_client(ontology, client_id)
        err_ctx = ErrorContext(ontology=str(ontology), client=str(client_id))

        encoder = None
        if needs_encoder:
            encoder = self.get_encoder(accept)
            if encoder is None:
                raise NotAcceptableError(accept, err_ctx)

        body = await read_input(request, fail_on_empty) if read_body else b""
        context = RequestContext(
            ontology=ontology,
            client=client_id,
            accept=accept,
            content_type=content_type,
            body=body,
        )

        payload = None
        if body:
            payload = self._decode(context, err_ctx)

        logger.debug(
            "Reasoner invocation prepared",
            extra={
                "ontology": str(ontology),
                "client": str(client_id),
                "media_type": accept,
            },
        )
        return ReasonerInvocation(
            context=context, client=client, payload=payload, encoder=encoder,
        )

    def _decode(self, context: RequestContext, err_ctx: ErrorContext) -> Any:
        decoder = self.get_decoder(context.content_type)
        if decoder is None:
            raise UnsupportedMediaTypeError(context.content_type, err_ctx)
        try:
            return decoder.decode(context.body, context.content_type)
        except ValueError as e:
            err_ctx.media_type = context.content_type
            raise BadRequestError(
                f"Error decoding payload as {context.content_type}",
                context=err_ctx,
            ) from e

    async def invoke(
        self, invocation: ReasonerInvocation,
        fn: Callable[..., _T], *args: Any,
    ) -> _T:
        """Call a reasoner method under the client's lock, off the event loop."""
        if self._thread_offload:
            return await asyncio.to_thread(invocation.client.call, fn, *args)
        return invocation.client.call(fn, *args)

    def respond(self, invocation: ReasonerInvocation, result: Any) -> Response:
        """Encode a reasoner result with the negotiated encoder."""
        if invocation.encoder is None:
            raise NotAcceptableError(invocation.context.accept)
        return Response(
            content=invocation.encoder.encode(result),
            media_type=invocation.encoder.media_type,
        )


def get_reasoner_handler(request: Request) -> ReasonerRequestHandler:
    """FastAPI dependency: the handler create_app() put on app.state."""
    return request.app.state.reasoner_handler
