"""WebSocket subscriber registry and broadcast fan-out.

Used by the WebSocket endpoint to register subscribers and by the
notification endpoint to broadcast.
"""

from status_relay.api.websocket.manager import (
    BroadcastResult,
    ConnectionManager,
    Subscriber,
)

__all__ = ["BroadcastResult", "ConnectionManager", "Subscriber"]
