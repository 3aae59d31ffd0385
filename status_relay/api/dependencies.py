"""FastAPI dependencies resolving shared objects from app.state (set in lifespan)."""

from fastapi import Request

from status_relay.api.websocket import ConnectionManager
from status_relay.infrastructure.messaging import RelayNotifier


def get_ws_manager(request: Request) -> ConnectionManager:
    """Return the subscriber registry owned by the running relay app."""
    return request.app.state.ws_manager


def get_relay_notifier(request: Request) -> RelayNotifier:
    """Return the relay notifier owned by the running ingestion app."""
    return request.app.state.relay_notifier
