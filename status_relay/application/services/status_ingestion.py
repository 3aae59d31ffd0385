"""Validates bot status callbacks and forwards them to the relay."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from status_relay.domain.exceptions import ValidationException
from status_relay.schemas.bot_status import BotStatusUpdate
from status_relay.shared.enums import BotStatus

if TYPE_CHECKING:
    from status_relay.infrastructure.messaging import RelayNotifier

logger = logging.getLogger(__name__)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class StatusIngestionService:
    """Turns a raw bot callback into a BotStatusUpdate and notifies the relay."""

    def __init__(self, notifier: RelayNotifier) -> None:
        self._notifier = notifier

    @staticmethod
    def parse(body: Any) -> BotStatusUpdate:
        """Validate the callback body.

        Status is checked first, then callId, matching what the bot
        integration expects to see in error messages.

        Raises:
            ValidationException: Body is not an object, status is not a known
                BotStatus code, or callId is missing.
        """
        if not isinstance(body, dict):
            raise ValidationException("Request body must be a JSON object")

        raw_status = body.get("status")
        if not _is_int(raw_status) or raw_status not in BotStatus.values():
            raise ValidationException("Invalid status provided", field="status")

        call_id = body.get("callId")
        if _is_int(call_id):
            call_id = str(call_id)
        if not isinstance(call_id, str) or not call_id:
            raise ValidationException("callId is required", field="callId")

        status = BotStatus(raw_status)
        return BotStatusUpdate(call_id=call_id, status=status, message=status.message)

    async def ingest(self, body: Any) -> BotStatusUpdate:
        """Validate, log and forward one callback. Relay failures do not raise."""
        update = self.parse(body)
        logger.info(
            "Bot status for call %s: %d - %s",
            update.call_id,
            update.status,
            update.message,
        )
        if not await self._notifier.notify(update.to_relay_payload()):
            logger.warning("Status for call %s was not relayed", update.call_id)
        return update
