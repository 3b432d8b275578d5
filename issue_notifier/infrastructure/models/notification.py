"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text

from issue_notifier.infrastructure.database import Base
from issue_notifier.infrastructure.models.ids import new_uuid
from issue_notifier.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for user inbox notifications."""

    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=new_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    issue_id = Column(String(36), ForeignKey("issues.id"), nullable=True, index=True)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(50), nullable=False, default="info")
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["NotificationModel"]
