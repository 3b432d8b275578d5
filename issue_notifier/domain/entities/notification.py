"""Domain entity representing an in-app notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Notification:
    """Information message delivered to a specific user's inbox."""

    id: str | None
    user_id: str
    issue_id: str | None
    event_type: str
    title: str
    message: str
    is_read: bool = False
    created_at: datetime | None = None


__all__ = ["Notification"]
