"""Read-only directories handed to the dispatcher instead of a session."""

from __future__ import annotations

from typing import Iterable

from sqlalchemy.orm import Session, sessionmaker

from issue_notifier.domain.entities import Contact, Issue
from issue_notifier.infrastructure.repositories import IssueRepository, UserRepository


class SqlIssueDirectory:
    """Look up issue snapshots and follower ids."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def get_issue(self, issue_id: str) -> Issue | None:
        with self._session_factory() as session:
            return IssueRepository(session).get(issue_id)

    def list_follower_ids(self, issue_id: str) -> list[str]:
        with self._session_factory() as session:
            return IssueRepository(session).list_follower_ids(issue_id)


class SqlUserDirectory:
    """Look up roles and contact preferences of users."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def list_roles(self, user_id: str) -> list[str]:
        with self._session_factory() as session:
            return UserRepository(session).list_roles(user_id)

    def get_contacts(self, user_ids: Iterable[str]) -> dict[str, Contact]:
        with self._session_factory() as session:
            return UserRepository(session).get_contact_map(user_ids)


__all__ = ["SqlIssueDirectory", "SqlUserDirectory"]
