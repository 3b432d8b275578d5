"""SQLAlchemy models for issues and their followers."""

from sqlalchemy import Column, DateTime, Float, ForeignKey, String, Text, UniqueConstraint

from issue_notifier.infrastructure.database import Base
from issue_notifier.infrastructure.models.ids import new_uuid
from issue_notifier.utils import now_in_app_naive_datetime


class IssueModel(Base):
    """Database representation of a reported issue."""

    __tablename__ = "issues"

    id = Column(String(36), primary_key=True, default=new_uuid)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    address = Column(String(255), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    issue_type = Column(String(30), nullable=False, default="other")
    reporter_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)
    reporter_email = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, default="pending")
    verification_status = Column(String(30), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)


class IssueFollowModel(Base):
    """A user following an issue they did not report."""

    __tablename__ = "issue_follows"
    __table_args__ = (UniqueConstraint("issue_id", "user_id", name="uq_issue_follows_issue_user"),)

    id = Column(String(36), primary_key=True, default=new_uuid)
    issue_id = Column(String(36), ForeignKey("issues.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["IssueFollowModel", "IssueModel"]
