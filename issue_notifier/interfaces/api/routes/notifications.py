"""Inbox endpoints for the authenticated caller's notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from issue_notifier.domain.entities import CallerIdentity, Notification
from issue_notifier.infrastructure.database import get_db
from issue_notifier.infrastructure.repositories import NotificationRepository
from issue_notifier.interfaces.api.dependencies import get_current_caller
from issue_notifier.interfaces.api.schemas import (
    NotificationMarkReadRequest,
    NotificationMarkReadResponse,
    NotificationRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or "",
        user_id=notification.user_id,
        issue_id=notification.issue_id,
        title=notification.title,
        message=notification.message,
        type=notification.event_type,
        is_read=notification.is_read,
        created_at=notification.created_at,
    )


@router.get("", response_model=list[NotificationRead])
def list_notifications(
    unread_only: bool = Query(False, description="Only return unread notifications"),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    caller: CallerIdentity = Depends(get_current_caller),
) -> list[NotificationRead]:
    """Return the most recent notifications for the authenticated user."""

    notifications = NotificationRepository(db).list_for_user(
        caller.user_id, unread_only=unread_only, limit=limit
    )
    return [_notification_to_schema(notification) for notification in notifications]


@router.post("/read", response_model=NotificationMarkReadResponse)
def mark_notifications_read(
    request: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
    caller: CallerIdentity = Depends(get_current_caller),
) -> NotificationMarkReadResponse:
    """Mark the caller's notifications identified by ``ids`` as read."""

    updated = NotificationRepository(db).mark_as_read(
        request.unique_ids(), user_id=caller.user_id
    )
    return NotificationMarkReadResponse(updated=updated)
