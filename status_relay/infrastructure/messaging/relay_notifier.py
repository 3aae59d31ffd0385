"""Outbound notification from the ingestion service to the relay.

Best-effort: one POST, no retry, no queue. An unreachable relay is logged
and reported as False, never raised, so the bot's callback still succeeds.
"""

from __future__ import annotations

import logging

import httpx

from status_relay.shared.telemetry.tracing import (
    TracedOperation,
    add_span_attributes,
    set_span_error,
)

logger = logging.getLogger(__name__)


class RelayNotifier:
    """POSTs status payloads to the relay's notification endpoint."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        url: str,
        timeout: float = 5.0,
    ) -> None:
        """Initialize. The client is owned by the caller (app lifespan)."""
        self._client = client
        self.url = url
        self.timeout = timeout

    async def notify(self, payload: bytes) -> bool:
        """Send one payload to the relay.

        Returns:
            True if the relay answered 2xx, False if it was unreachable or errored.
        """
        async with TracedOperation("relay.notify", {"event.size": len(payload)}):
            try:
                response = await self._client.post(
                    self.url,
                    content=payload,
                    headers={"Content-Type": "application/json"},
                    timeout=self.timeout,
                )
                response.raise_for_status()
            except httpx.HTTPError as e:
                logger.error("Failed to notify relay at %s: %r", self.url, e)
                set_span_error(e)
                return False
            else:
                add_span_attributes(**{"http.status_code": response.status_code})
                logger.debug("Relay notified (%d)", response.status_code)
                return True
