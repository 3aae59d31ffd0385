"""Shared enumerations.

BotStatus is the fixed set of call states a calling bot reports to the
ingestion service.
"""

from enum import IntEnum


class BotStatus(IntEnum):
    """Call status codes reported by the calling bot."""

    CALLING = 1
    CONNECTED = 2
    COMPLETED = 3
    NO_ANSWER = 4
    ERROR = 5

    @classmethod
    def values(cls) -> list[int]:
        """Return all valid codes."""
        return [member.value for member in cls]

    @property
    def message(self) -> str:
        """Human-readable message shown to operators for this status."""
        return BOT_STATUS_MESSAGES[self]


BOT_STATUS_MESSAGES: dict[BotStatus, str] = {
    BotStatus.CALLING: "Уже звоню",
    BotStatus.CONNECTED: "Дозвонился",
    BotStatus.COMPLETED: "Звонок успешно завершен",
    BotStatus.NO_ANSWER: "Не дозвонился",
    BotStatus.ERROR: "Ошибка",
}
