"""Bot status callback endpoint (ingestion service only).

Validates the bot's report, answers the bot, and forwards the status to
the relay on a best-effort basis.
"""

from fastapi import APIRouter, Depends, Request

from status_relay.api.dependencies import get_relay_notifier
from status_relay.application.services import StatusIngestionService
from status_relay.domain.exceptions import ValidationException
from status_relay.infrastructure.messaging import RelayNotifier
from status_relay.schemas.bot_status import BotStatusResponse

router = APIRouter()


@router.post("/bot-status", response_model=BotStatusResponse)
async def receive_bot_status(
    request: Request,
    notifier: RelayNotifier = Depends(get_relay_notifier),
) -> BotStatusResponse:
    """Accept {"callId", "status"} from the calling bot.

    Returns 400 for an unknown status or missing callId. The response does
    not depend on whether the relay was reachable.
    """
    try:
        body = await request.json()
    except ValueError as e:
        raise ValidationException("Request body must be valid JSON") from e
    update = await StatusIngestionService(notifier).ingest(body)
    return BotStatusResponse(received_status=int(update.status), message=update.message)
