"""Route tables for the relay and the ingestion service.

The relay's paths come from settings, so its routes are registered on a
router built at app creation. Order matters: the status update route and
the WebSocket route go before the HTTP catch-all.
"""

from fastapi import APIRouter

from status_relay.api.endpoints import bot_status
from status_relay.api.endpoints.liveness import LIVENESS_METHODS, liveness
from status_relay.api.endpoints.notifications import update_status
from status_relay.api.endpoints.websocket import websocket_endpoint
from status_relay.core.config import Settings
from status_relay.schemas.notification import NotificationAck


def build_relay_router(settings: Settings) -> APIRouter:
    """Return the relay's routes: status updates, subscriber upgrades, liveness."""
    router = APIRouter()
    router.add_api_route(
        settings.notification_path,
        update_status,
        methods=["POST"],
        response_model=NotificationAck,
        tags=["notifications"],
    )
    router.add_api_websocket_route(settings.ws_path, websocket_endpoint)
    router.add_api_route(
        "/{path:path}",
        liveness,
        methods=LIVENESS_METHODS,
        include_in_schema=False,
    )
    return router


ingest_router = APIRouter()
ingest_router.include_router(bot_status.router, prefix="/api", tags=["bot-status"])
