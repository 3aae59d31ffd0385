"""Notification endpoint: POST a raw status payload, relay it to every subscriber.

The body is never parsed. Whatever bytes arrive are what subscribers get.
The 200 ack means "received and read", not "delivered".
"""

import logging

from fastapi import Depends, Request
from starlette.requests import ClientDisconnect

from status_relay.api.dependencies import get_ws_manager
from status_relay.api.websocket import ConnectionManager
from status_relay.core.config import get_settings
from status_relay.domain.events import StatusEvent
from status_relay.domain.exceptions import NotificationReadException
from status_relay.schemas.notification import NotificationAck

logger = logging.getLogger(__name__)


async def update_status(
    request: Request,
    manager: ConnectionManager = Depends(get_ws_manager),
) -> NotificationAck:
    """Read the full body, queue it for verbatim fan-out, acknowledge.

    The ack does not wait for subscriber sends.

    Raises:
        NotificationReadException: Client disconnected before the body was read (500).
    """
    try:
        body = await request.body()
    except ClientDisconnect as e:
        logger.warning("Status update body could not be read: client disconnected")
        raise NotificationReadException() from e

    logger.info("Status update received (%d bytes)", len(body))
    logger.debug("Status update payload: %r", body)
    depth = manager.publish(StatusEvent(payload=body))
    logger.debug("Status update queued for fan-out (queue depth %d)", depth)
    return NotificationAck(message=get_settings().ack_message)
