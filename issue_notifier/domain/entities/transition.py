"""Domain values describing issue status and verification transitions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TransitionKind(str, Enum):
    """Which lifecycle attribute of an issue changed."""

    STATUS = "status"
    VERIFICATION = "verification"


ISSUE_STATUSES: tuple[str, ...] = ("pending", "in_progress", "resolved", "withdrawn")
VERIFICATION_STATUSES: tuple[str, ...] = (
    "pending_verification",
    "verified",
    "invalid",
    "spam",
)

ISSUE_STATUS_LABELS: dict[str, str] = {
    "pending": "Pending",
    "in_progress": "In Progress",
    "resolved": "Resolved",
    "withdrawn": "Withdrawn",
}
VERIFICATION_STATUS_LABELS: dict[str, str] = {
    "pending_verification": "Pending Verification",
    "verified": "Verified",
    "invalid": "Invalid",
    "spam": "Spam",
}


@dataclass(frozen=True)
class Transition:
    """A validated ``old_state -> new_state`` change for one issue."""

    kind: TransitionKind
    issue_id: str
    old_state: str | None
    new_state: str
    actor_name: str | None = None
    actor_role: str | None = None

    @property
    def notification_type(self) -> str:
        """Tag stored with the in-app notification, e.g. ``status_resolved``."""

        return f"{self.kind.value}_{self.new_state}"


__all__ = [
    "ISSUE_STATUSES",
    "ISSUE_STATUS_LABELS",
    "Transition",
    "TransitionKind",
    "VERIFICATION_STATUSES",
    "VERIFICATION_STATUS_LABELS",
]
