"""Reasoner Server — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ReasonerServerError → status + structured JSON
    - CORS configured from settings (not hardcoded)
    - ServerState, CodecRegistry and ReasonerRequestHandler live on app.state,
      constructed once per app and shared by every request

Design Decisions:
    - create_app() factory: embedders (and tests) pass their own state and codecs;
      the module-level `app` serves `uvicorn reasoner_server.main:app`
    - Lifespan configures logging only; app.state is filled at construction so
      ASGI transports that skip lifespan still get a working handler
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reasoner_server.api.error_handlers import register_error_handlers
from reasoner_server.api.reasoner_handler import ReasonerRequestHandler
from reasoner_server.api.routes import clients, health, ontologies, reasoner
from reasoner_server.config import get_settings
from reasoner_server.core.codec_registry import CodecRegistry
from reasoner_server.core.server_state import ServerState
from reasoner_server.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(
        f"{settings.service_name} started with "
        f"{len(app.state.server_state.ontologies())} ontologies loaded",
    )
    yield
    logger.info(f"{settings.service_name} shutting down")


def create_app(
    state: ServerState | None = None,
    codecs: CodecRegistry | None = None,
) -> FastAPI:
    """Build the API around a server state and codec registry."""
    settings = get_settings()
    app = FastAPI(
        title="Reasoner Server", version=settings.service_version,
        lifespan=lifespan,
    )

    app.state.server_state = state if state is not None else ServerState()
    app.state.codecs = codecs if codecs is not None else CodecRegistry()
    app.state.reasoner_handler = ReasonerRequestHandler(
        app.state.server_state, app.state.codecs,
        thread_offload=settings.reasoner_thread_offload,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routes: explicit registration
    app.include_router(health.router)
    app.include_router(ontologies.router)
    app.include_router(clients.router)
    app.include_router(reasoner.router)

    register_error_handlers(app)
    return app


app = create_app()
