"""In-app notification channel backed by the ``notifications`` table."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session, sessionmaker

from issue_notifier.domain.entities import Notification, Recipient
from issue_notifier.infrastructure.repositories import NotificationRepository
from issue_notifier.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


class SqlNotificationSink:
    """Append one inbox row per call, each in its own session.

    Calls are not idempotent: the same recipient notified twice gets two rows.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def persist(
        self,
        recipient: Recipient,
        *,
        issue_id: str,
        title: str,
        message: str,
        event_type: str,
    ) -> Notification:
        notification = Notification(
            id=None,
            user_id=recipient.user_id,
            issue_id=issue_id,
            event_type=event_type,
            title=title,
            message=message,
            is_read=False,
            created_at=now_in_app_timezone(),
        )
        with self._session_factory() as session:
            try:
                saved = NotificationRepository(session).create(notification)
            except Exception:
                session.rollback()
                raise
        logger.debug(
            "Created %s notification %s for user %s", event_type, saved.id, recipient.user_id
        )
        return saved


__all__ = ["SqlNotificationSink"]
