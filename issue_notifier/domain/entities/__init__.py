"""Domain entities exposed by the application."""

from .dispatch_result import DispatchResult
from .issue import Issue
from .notification import Notification
from .recipient import Contact, Recipient
from .transition import (
    ISSUE_STATUSES,
    ISSUE_STATUS_LABELS,
    VERIFICATION_STATUSES,
    VERIFICATION_STATUS_LABELS,
    Transition,
    TransitionKind,
)
from .user import APP_ROLES, CallerIdentity, has_any_role

__all__ = [
    "APP_ROLES",
    "CallerIdentity",
    "Contact",
    "DispatchResult",
    "ISSUE_STATUSES",
    "ISSUE_STATUS_LABELS",
    "Issue",
    "Notification",
    "Recipient",
    "Transition",
    "TransitionKind",
    "VERIFICATION_STATUSES",
    "VERIFICATION_STATUS_LABELS",
    "has_any_role",
]
