"""Domain exceptions for the status relay.

Presentation layer maps them to HTTP responses in exception handlers;
the WebSocket acceptor maps handshake refusals to close codes.
"""

from typing import Any

from status_relay.core.constants import (
    WS_CLOSE_POLICY_VIOLATION,
    WS_CLOSE_TRY_AGAIN_LATER,
)


class RelayException(Exception):
    """Base exception for all relay errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(RelayException):
    """Raised when input validation fails (e.g. unknown bot status code)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class NotificationReadException(RelayException):
    """Raised when a notification body cannot be read (client went away mid-body)."""

    def __init__(self, message: str = "Failed to read notification body") -> None:
        super().__init__(message, "NOTIFICATION_READ_ERROR")


class HandshakeRejected(RelayException):
    """Base for WebSocket handshake refusals; carries the close code to send."""

    close_code: int = WS_CLOSE_POLICY_VIOLATION


class OriginNotAllowed(HandshakeRejected):
    """Raised when a subscriber's Origin header is not in the allowlist."""

    def __init__(self, origin: str | None) -> None:
        super().__init__(
            "Origin not allowed",
            "ORIGIN_NOT_ALLOWED",
            {"origin": origin},
        )


class SubscriberLimitExceeded(HandshakeRejected):
    """Raised when the relay already holds the configured maximum of subscribers."""

    close_code = WS_CLOSE_TRY_AGAIN_LATER

    def __init__(self, limit: int) -> None:
        super().__init__(
            f"Subscriber limit of {limit} reached",
            "SUBSCRIBER_LIMIT_EXCEEDED",
            {"limit": limit},
        )
