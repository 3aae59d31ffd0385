"""API request/response schemas."""

from status_relay.schemas.bot_status import BotStatusResponse, BotStatusUpdate
from status_relay.schemas.notification import NotificationAck

__all__ = ["BotStatusResponse", "BotStatusUpdate", "NotificationAck"]
