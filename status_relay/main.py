"""Relay application entry point.

Wiring only: lifespan, exception handlers, middleware, routes. See
status_relay.core.lifespan and status_relay.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from status_relay.api.router import build_relay_router
from status_relay.core.config import get_settings
from status_relay.core.exception_handlers import register_exception_handlers
from status_relay.core.lifespan import create_lifespan
from status_relay.middleware import RequestContextMiddleware, RequestSizeLimitMiddleware
from status_relay.shared.telemetry import setup_logging


def create_app() -> FastAPI:
    """Build the relay app. Every path other than the status update route answers liveness."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
        # No docs routes: every unmatched path belongs to the liveness catch-all.
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    register_exception_handlers(app)

    # Middleware: last added = outermost. Order: request context → size limit → CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        RequestSizeLimitMiddleware,
        max_bytes=settings.max_notification_bytes,
        paths=[settings.notification_path],
    )
    app.add_middleware(
        RequestContextMiddleware,
        request_id_header=settings.request_id_header,
        correlation_id_header=settings.correlation_id_header,
    )

    app.include_router(build_relay_router(settings))
    return app


app = create_app()
