"""Shared fixtures: environment, in-memory collaborators and a dispatcher."""

from __future__ import annotations

import os
import tempfile
import threading
from pathlib import Path

import pytest

TEST_DB_PATH = Path(tempfile.gettempdir()) / "issue_notifier_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from issue_notifier.application.use_cases.notifications import (  # noqa: E402
    EmailSendStatus,
    TransitionDispatcher,
)
from issue_notifier.domain.entities import (  # noqa: E402
    CallerIdentity,
    Contact,
    Issue,
    Notification,
)

ISSUE_ID = "6f1c2a4e-8b9d-4c3e-a1f2-0d9e8c7b6a51"
REPORTER_ID = "0b6e4c12-3f5a-4d8e-9c21-7a3b5d9e1f00"
FOLLOWER_1_ID = "1c7f5d23-4a6b-4e9f-8d32-8b4c6e0f2a11"
FOLLOWER_2_ID = "2d8a6e34-5b7c-4fa0-9e43-9c5d7f1a3b22"
ADMIN_ID = "3e9b7f45-6c8d-4ab1-8f54-ad6e8a2b4c33"
STRANGER_ID = "4fa08a56-7d9e-4bc2-9a65-be7f9b3c5d44"

TOKENS = {
    "reporter-token": CallerIdentity(user_id=REPORTER_ID, email="reporter@example.com"),
    "follower-token": CallerIdentity(user_id=FOLLOWER_1_ID),
    "admin-token": CallerIdentity(user_id=ADMIN_ID, email="admin@example.com"),
    "stranger-token": CallerIdentity(user_id=STRANGER_ID),
}


class FakeIdentityVerifier:
    def __init__(self, tokens: dict[str, CallerIdentity]) -> None:
        self._tokens = tokens
        self.calls = 0

    def verify(self, credential: str) -> CallerIdentity:
        self.calls += 1
        try:
            return self._tokens[credential]
        except KeyError:
            raise ValueError("Could not validate credentials") from None


class InMemoryIssueDirectory:
    def __init__(self) -> None:
        self.issues: dict[str, Issue] = {}
        self.followers: dict[str, list[str]] = {}
        self.lookups = 0
        self.fail_followers = False

    def get_issue(self, issue_id: str) -> Issue | None:
        self.lookups += 1
        return self.issues.get(issue_id)

    def list_follower_ids(self, issue_id: str) -> list[str]:
        self.lookups += 1
        if self.fail_followers:
            raise RuntimeError("follower store unavailable")
        return list(self.followers.get(issue_id, []))


class InMemoryUserDirectory:
    def __init__(self) -> None:
        self.roles: dict[str, list[str]] = {}
        self.contacts: dict[str, Contact] = {}
        self.lookups = 0

    def list_roles(self, user_id: str) -> list[str]:
        self.lookups += 1
        return list(self.roles.get(user_id, []))

    def get_contacts(self, user_ids) -> dict[str, Contact]:
        self.lookups += 1
        return {
            user_id: self.contacts[user_id] for user_id in user_ids if user_id in self.contacts
        }


class RecordingNotificationSink:
    def __init__(self) -> None:
        self.records: list[Notification] = []
        self.failing_users: set[str] = set()
        self._lock = threading.Lock()

    def persist(self, recipient, *, issue_id, title, message, event_type) -> Notification:
        if recipient.user_id in self.failing_users:
            raise RuntimeError("insert failed")
        notification = Notification(
            id=str(len(self.records) + 1),
            user_id=recipient.user_id,
            issue_id=issue_id,
            event_type=event_type,
            title=title,
            message=message,
        )
        with self._lock:
            self.records.append(notification)
        return notification

    def for_user(self, user_id: str) -> list[Notification]:
        return [record for record in self.records if record.user_id == user_id]


class RecordingEmailSender:
    def __init__(self, *, enabled: bool = True) -> None:
        self.enabled = enabled
        self.sent: list[tuple[str, str, str]] = []
        self.failing_addresses: set[str] = set()
        self._lock = threading.Lock()

    def send(self, to: str, subject: str, html_content: str) -> EmailSendStatus:
        if not self.enabled:
            return EmailSendStatus.SKIPPED
        if to in self.failing_addresses:
            raise ConnectionError("provider unreachable")
        with self._lock:
            self.sent.append((to, subject, html_content))
        return EmailSendStatus.SENT

    @property
    def addresses(self) -> list[str]:
        return [to for to, _, _ in self.sent]


def build_issue(**overrides) -> Issue:
    values = {
        "id": ISSUE_ID,
        "title": "Deep pothole on Main Street",
        "description": "A large pothole near the crosswalk is damaging cars.",
        "address": "123 Main Street",
        "reporter_id": REPORTER_ID,
        "reporter_email": "reporter@example.com",
        "status": "resolved",
        "verification_status": None,
    }
    values.update(overrides)
    return Issue(**values)


@pytest.fixture()
def identity_verifier() -> FakeIdentityVerifier:
    return FakeIdentityVerifier(TOKENS)


@pytest.fixture()
def issues() -> InMemoryIssueDirectory:
    directory = InMemoryIssueDirectory()
    directory.issues[ISSUE_ID] = build_issue()
    return directory


@pytest.fixture()
def users() -> InMemoryUserDirectory:
    directory = InMemoryUserDirectory()
    directory.roles[ADMIN_ID] = ["admin"]
    directory.contacts = {
        REPORTER_ID: Contact(user_id=REPORTER_ID, email="reporter@example.com"),
        FOLLOWER_1_ID: Contact(user_id=FOLLOWER_1_ID, email="follower1@example.com"),
        FOLLOWER_2_ID: Contact(user_id=FOLLOWER_2_ID, email="follower2@example.com"),
    }
    return directory


@pytest.fixture()
def sink() -> RecordingNotificationSink:
    return RecordingNotificationSink()


@pytest.fixture()
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture()
def dispatcher(identity_verifier, issues, users, sink, email_sender) -> TransitionDispatcher:
    return TransitionDispatcher(
        identity_verifier=identity_verifier,
        issues=issues,
        users=users,
        notifications=sink,
        email_sender=email_sender,
        delivery_timeout=5.0,
        max_workers=4,
    )
