"""Request context using contextvars.

Holds the current request ID so log lines emitted while handling a status
update (including its fan-out) can be tied back to that request.

Usage:
    token = set_request_id("abc123")
    ...
    reset_request_id(token)
"""

import logging
from contextvars import ContextVar, Token

_current_request_id: ContextVar[str | None] = ContextVar("current_request_id", default=None)


def set_request_id(request_id: str | None) -> Token:
    """Set the request ID for the current task; returns a token for reset."""
    return _current_request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    """Restore the request ID that was current before set_request_id()."""
    _current_request_id.reset(token)


def get_request_id() -> str | None:
    """Return the current request ID, or None outside a request."""
    return _current_request_id.get()


class RequestIdLogFilter(logging.Filter):
    """Adds record.request_id ("-" outside a request) for the log format."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True
