"""Bot status ingestion schemas (camelCase on the wire, as the bot sends them)."""

import json

from pydantic import BaseModel, ConfigDict, Field

from status_relay.shared.enums import BotStatus


class BotStatusUpdate(BaseModel):
    """A validated bot callback, re-serialized for the relay."""

    model_config = ConfigDict(populate_by_name=True)

    call_id: str = Field(..., alias="callId", description="Call identifier")
    status: BotStatus = Field(..., description="Bot status code (1-5)")
    message: str = Field(..., description="Human-readable status message")

    def to_relay_payload(self) -> bytes:
        """Compact UTF-8 JSON; non-ASCII text is kept as-is."""
        return json.dumps(
            {"callId": self.call_id, "status": int(self.status), "message": self.message},
            ensure_ascii=False,
            separators=(",", ":"),
        ).encode("utf-8")


class BotStatusResponse(BaseModel):
    """Response for POST /api/bot-status."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    received_status: int = Field(..., serialization_alias="receivedStatus")
    message: str
