"""Pydantic models describing inbox notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    ids: list[str] = Field(..., min_length=1, description="Notification identifiers")

    def unique_ids(self) -> list[str]:
        """Return the list of identifiers without duplicates preserving order."""

        return list(dict.fromkeys(self.ids))


class NotificationMarkReadResponse(BaseModel):
    updated: int


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: str
    user_id: str
    issue_id: str | None = None
    title: str
    message: str
    type: str
    is_read: bool
    created_at: datetime | None = None


__all__ = [
    "NotificationMarkReadRequest",
    "NotificationMarkReadResponse",
    "NotificationRead",
]
