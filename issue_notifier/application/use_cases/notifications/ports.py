"""Narrow collaborator interfaces consumed by :class:`TransitionDispatcher`.

The dispatcher never receives a database session. It can only read issues,
followers, contacts and roles, append inbox rows and send email through the
ports below.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Protocol

from issue_notifier.domain.entities import CallerIdentity, Contact, Issue, Notification, Recipient


class EmailSendStatus(str, Enum):
    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"


class IdentityVerifier(Protocol):
    def verify(self, credential: str) -> CallerIdentity:
        """Return the identity behind ``credential`` or raise ``ValueError``."""


class IssueDirectory(Protocol):
    def get_issue(self, issue_id: str) -> Issue | None:
        ...

    def list_follower_ids(self, issue_id: str) -> list[str]:
        ...


class UserDirectory(Protocol):
    def list_roles(self, user_id: str) -> list[str]:
        ...

    def get_contacts(self, user_ids: Iterable[str]) -> dict[str, Contact]:
        ...


class NotificationSink(Protocol):
    def persist(
        self,
        recipient: Recipient,
        *,
        issue_id: str,
        title: str,
        message: str,
        event_type: str,
    ) -> Notification:
        ...


class EmailSender(Protocol):
    def send(self, to: str, subject: str, html_content: str) -> EmailSendStatus:
        ...


__all__ = [
    "EmailSendStatus",
    "EmailSender",
    "IdentityVerifier",
    "IssueDirectory",
    "NotificationSink",
    "UserDirectory",
]
