"""Catch-all liveness responder: any request that is not a status update gets a 200."""

from fastapi.responses import PlainTextResponse

from status_relay.core.config import get_settings

LIVENESS_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def liveness() -> PlainTextResponse:
    """Return the plain liveness string. No broadcast, no dependencies."""
    return PlainTextResponse(get_settings().liveness_message)
