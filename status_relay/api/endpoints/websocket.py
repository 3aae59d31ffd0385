"""WebSocket endpoint: subscribers connect here to receive status broadcasts.

Uses only the injected ConnectionManager (set in lifespan). Inbound frames
are read and dropped; the loop exists to observe the client's close.
"""

import logging

from fastapi import WebSocket
from starlette.websockets import WebSocketState

from status_relay.core.config import get_settings
from status_relay.domain.exceptions import HandshakeRejected, OriginNotAllowed

logger = logging.getLogger(__name__)


async def _reject_websocket(websocket: WebSocket, reason: str, code: int) -> None:
    """Refuse the connection.

    Before accept (origin refusals) this becomes an HTTP 403 denial of the
    upgrade; after accept (subscriber cap) it is a normal close frame with
    code/reason, so the client sees 1013.
    """
    if websocket.application_state == WebSocketState.CONNECTING:
        await websocket.close(code=code)
    else:
        await websocket.close(code=code, reason=reason)


def _check_origin(websocket: WebSocket) -> None:
    """Raise OriginNotAllowed when an allowlist is configured and the Origin is not on it.

    Clients that send no Origin (non-browser tools) are let through.
    """
    allowed = get_settings().ws_allowed_origin_list()
    origin = websocket.headers.get("origin")
    if allowed and origin is not None and origin not in allowed:
        raise OriginNotAllowed(origin)


async def websocket_endpoint(websocket: WebSocket) -> None:
    """Register the connection with the manager and deregister it on close."""
    manager = websocket.app.state.ws_manager
    try:
        _check_origin(websocket)
        subscriber = await manager.connect(websocket)
    except HandshakeRejected as e:
        logger.warning("WebSocket handshake rejected: %s %s", e.error_code, e.details)
        await _reject_websocket(websocket, e.message, e.close_code)
        return
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    finally:
        await manager.disconnect(subscriber)
