"""Call status relay: fans bot call-status notifications out to WebSocket subscribers."""

__version__ = "1.0.0"
