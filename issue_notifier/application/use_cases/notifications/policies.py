"""Per-kind rules shared by the status and verification notifiers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from issue_notifier.domain.entities import (
    ISSUE_STATUSES,
    ISSUE_STATUS_LABELS,
    VERIFICATION_STATUSES,
    VERIFICATION_STATUS_LABELS,
    CallerIdentity,
    Issue,
    TransitionKind,
    has_any_role,
)

ADMIN_ROLES: frozenset[str] = frozenset(
    {"admin", "super_admin", "moderator", "department_admin", "field_worker"}
)
VERIFIER_ROLES: frozenset[str] = frozenset(
    {"admin", "super_admin", "moderator", "department_admin", "field_worker"}
)


@dataclass(frozen=True)
class TransitionPolicy:
    """Enumeration, labels and authorization rule for one transition kind."""

    kind: TransitionKind
    states: tuple[str, ...]
    labels: Mapping[str, str]
    privileged_roles: frozenset[str]
    reporter_may_trigger: bool
    forbidden_message: str

    def label(self, state: str | None) -> str:
        if state is None:
            return "None"
        return self.labels.get(state, state)

    def is_authorized(
        self, caller: CallerIdentity, issue: Issue, roles: Iterable[str]
    ) -> bool:
        """Return ``True`` when ``caller`` may notify about ``issue``."""

        is_reporter = issue.reporter_id is not None and issue.reporter_id == caller.user_id
        if is_reporter:
            return self.reporter_may_trigger
        return has_any_role(roles, self.privileged_roles)


STATUS_POLICY = TransitionPolicy(
    kind=TransitionKind.STATUS,
    states=ISSUE_STATUSES,
    labels=ISSUE_STATUS_LABELS,
    privileged_roles=ADMIN_ROLES,
    reporter_may_trigger=True,
    forbidden_message="Forbidden: insufficient permissions to trigger notifications",
)

VERIFICATION_POLICY = TransitionPolicy(
    kind=TransitionKind.VERIFICATION,
    states=VERIFICATION_STATUSES,
    labels=VERIFICATION_STATUS_LABELS,
    privileged_roles=VERIFIER_ROLES,
    reporter_may_trigger=False,
    forbidden_message=(
        "Forbidden: only moderators and admins can trigger verification notifications"
    ),
)

DEFAULT_POLICIES: dict[TransitionKind, TransitionPolicy] = {
    TransitionKind.STATUS: STATUS_POLICY,
    TransitionKind.VERIFICATION: VERIFICATION_POLICY,
}


__all__ = [
    "ADMIN_ROLES",
    "DEFAULT_POLICIES",
    "STATUS_POLICY",
    "TransitionPolicy",
    "VERIFICATION_POLICY",
    "VERIFIER_ROLES",
]
