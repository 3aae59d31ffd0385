"""Ingestion service entry point (uvicorn status_relay.ingest:app).

Receives callbacks from the calling bot, validates them, and notifies the
relay. Runs as its own process so the relay's HTTP surface stays minimal.
"""

from fastapi import FastAPI

from status_relay.api.router import ingest_router
from status_relay.core.config import get_settings
from status_relay.core.exception_handlers import register_exception_handlers
from status_relay.core.lifespan import create_ingest_lifespan
from status_relay.middleware import RequestContextMiddleware
from status_relay.shared.telemetry import setup_logging


def create_ingest_app() -> FastAPI:
    """Build the ingestion app."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=f"{settings.app_name}-ingest",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_ingest_lifespan,
    )

    register_exception_handlers(app)
    app.add_middleware(
        RequestContextMiddleware,
        request_id_header=settings.request_id_header,
        correlation_id_header=settings.correlation_id_header,
    )

    app.include_router(ingest_router)
    return app


app = create_ingest_app()
