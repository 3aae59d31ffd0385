"""Notification endpoint schemas."""

from pydantic import BaseModel, Field


class NotificationAck(BaseModel):
    """Response for POST /update-status (received and read)."""

    message: str = Field(..., description="Acknowledgement text")
