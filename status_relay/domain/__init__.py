"""Domain layer: status events, bot status codes, and exceptions."""

from status_relay.domain.events import StatusEvent
from status_relay.domain.exceptions import (
    HandshakeRejected,
    NotificationReadException,
    OriginNotAllowed,
    RelayException,
    SubscriberLimitExceeded,
    ValidationException,
)

__all__ = [
    "StatusEvent",
    "RelayException",
    "ValidationException",
    "NotificationReadException",
    "HandshakeRejected",
    "OriginNotAllowed",
    "SubscriberLimitExceeded",
]
