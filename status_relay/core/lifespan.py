"""Application lifespans: startup and shutdown for the relay and the ingestion service.

Only wiring of shared objects here (subscriber registry, HTTP client,
telemetry); no request handling.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from status_relay.core.config import get_settings
from status_relay.shared.telemetry import setup_from_settings, shutdown_telemetry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Relay lifespan.

    Startup: subscriber registry on app.state.ws_manager and its broadcast
    dispatcher, telemetry (if enabled). Shutdown: drain queued updates, close
    remaining subscribers with 1001, flush telemetry.
    """
    settings = get_settings()

    # ---- Startup ----
    from status_relay.api.websocket import ConnectionManager

    app.state.ws_manager = ConnectionManager(
        send_timeout=settings.ws_send_timeout_seconds,
        max_subscribers=settings.ws_max_subscribers,
    )
    app.state.ws_manager.start()
    setup_from_settings(app, settings)
    logger.info(
        "Status relay listening for updates on %s and subscribers on %s",
        settings.notification_path,
        settings.ws_path,
    )

    yield

    # ---- Shutdown ----
    await app.state.ws_manager.stop(drain_timeout=settings.ws_send_timeout_seconds)
    await app.state.ws_manager.close_all()
    shutdown_telemetry()


@asynccontextmanager
async def create_ingest_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Ingestion service lifespan.

    Startup: shared HTTP client and RelayNotifier on app.state, telemetry
    (if enabled). Shutdown: close the client, flush telemetry.
    """
    settings = get_settings()

    # ---- Startup ----
    from status_relay.infrastructure.messaging import RelayNotifier

    app.state.relay_http_client = httpx.AsyncClient(
        timeout=settings.relay_notify_timeout_seconds
    )
    app.state.relay_notifier = RelayNotifier(
        client=app.state.relay_http_client,
        url=settings.relay_notify_url,
        timeout=settings.relay_notify_timeout_seconds,
    )
    setup_from_settings(app, settings)
    logger.info("Bot status updates will be relayed to %s", settings.relay_notify_url)

    yield

    # ---- Shutdown ----
    if getattr(app.state, "relay_http_client", None) is not None:
        await app.state.relay_http_client.aclose()
        app.state.relay_http_client = None
        logger.info("Relay HTTP client closed")
    shutdown_telemetry()
