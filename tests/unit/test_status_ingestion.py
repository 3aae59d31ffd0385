"""Tests for StatusIngestionService and the BotStatus enum."""

import pytest

from status_relay.application.services import StatusIngestionService
from status_relay.domain.exceptions import ValidationException
from status_relay.shared.enums import BOT_STATUS_MESSAGES, BotStatus


class RecordingNotifier:
    def __init__(self, result: bool = True) -> None:
        self.payloads: list[bytes] = []
        self._result = result

    async def notify(self, payload: bytes) -> bool:
        self.payloads.append(payload)
        return self._result


def test_every_status_has_a_message() -> None:
    assert BotStatus.values() == [1, 2, 3, 4, 5]
    assert set(BOT_STATUS_MESSAGES) == set(BotStatus)
    assert BotStatus(4).message == "Не дозвонился"


class TestParse:
    def test_valid_body(self) -> None:
        update = StatusIngestionService.parse({"callId": "c-1", "status": 1})
        assert update.call_id == "c-1"
        assert update.status is BotStatus.CALLING
        assert update.message == "Уже звоню"

    def test_numeric_call_id_is_stringified(self) -> None:
        assert StatusIngestionService.parse({"callId": 42, "status": 3}).call_id == "42"

    def test_status_checked_before_call_id(self) -> None:
        with pytest.raises(ValidationException) as exc_info:
            StatusIngestionService.parse({})
        assert exc_info.value.message == "Invalid status provided"
        assert exc_info.value.details == {"field": "status"}

    @pytest.mark.parametrize("body", [[], "text", 3, None])
    def test_non_object_body(self, body) -> None:
        with pytest.raises(ValidationException):
            StatusIngestionService.parse(body)

    def test_bool_status_is_not_an_int(self) -> None:
        with pytest.raises(ValidationException):
            StatusIngestionService.parse({"callId": "c", "status": True})

    def test_extra_fields_are_not_forwarded(self) -> None:
        update = StatusIngestionService.parse({"callId": "c", "status": 2, "secret": "x"})
        assert b"secret" not in update.to_relay_payload()


async def test_ingest_forwards_compact_utf8_json() -> None:
    notifier = RecordingNotifier()
    await StatusIngestionService(notifier).ingest({"callId": "call-1", "status": 2})
    assert notifier.payloads == [
        '{"callId":"call-1","status":2,"message":"Дозвонился"}'.encode("utf-8")
    ]


async def test_ingest_does_not_raise_when_relay_fails() -> None:
    notifier = RecordingNotifier(result=False)
    update = await StatusIngestionService(notifier).ingest({"callId": "c", "status": 5})
    assert update.status is BotStatus.ERROR
    assert len(notifier.payloads) == 1
