"""Shared enums and telemetry used by both the relay and the ingestion service.

No business logic.
"""

from status_relay.shared.enums import BOT_STATUS_MESSAGES, BotStatus

__all__ = ["BotStatus", "BOT_STATUS_MESSAGES"]
