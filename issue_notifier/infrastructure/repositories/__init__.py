"""Repository implementations for infrastructure layer."""

from .issue_repository import IssueRepository
from .notification_repository import NotificationRepository
from .user_repository import UserRepository

__all__ = [
    "IssueRepository",
    "NotificationRepository",
    "UserRepository",
]
