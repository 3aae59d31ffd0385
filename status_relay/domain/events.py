"""StatusEvent: one opaque notification payload, forwarded verbatim."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StatusEvent:
    """Raw bytes received by the notification endpoint.

    The relay never parses the payload. It is created on receipt,
    handed to the fan-out and dropped afterwards.
    """

    payload: bytes

    def __len__(self) -> int:
        return len(self.payload)

    def as_frame(self) -> str | bytes:
        """Return the WebSocket frame content for this event.

        Valid UTF-8 goes out as a text frame (same bytes on the wire);
        anything else goes out as a binary frame.
        """
        try:
            return self.payload.decode("utf-8")
        except UnicodeDecodeError:
            return self.payload
