"""SQLAlchemy models for users, their profiles and their roles."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship

from issue_notifier.infrastructure.database import Base
from issue_notifier.infrastructure.models.ids import new_uuid
from issue_notifier.utils import now_in_app_naive_datetime


class UserModel(Base):
    """Account known to the identity provider."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_uuid)
    email = Column(String(255), nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)

    profile = relationship("ProfileModel", back_populates="user", uselist=False)
    roles = relationship("UserRoleModel", back_populates="user", cascade="all, delete-orphan")


class ProfileModel(Base):
    """Public profile and notification preferences of a user."""

    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=new_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, unique=True, index=True)
    full_name = Column(String(120), nullable=True)
    notification_email = Column(Boolean, nullable=False, default=True)
    notification_push = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)

    user = relationship("UserModel", back_populates="profile")


class UserRoleModel(Base):
    """Role granted to a user; a user may hold several."""

    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),)

    id = Column(String(36), primary_key=True, default=new_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    role = Column(String(30), nullable=False)

    user = relationship("UserModel", back_populates="roles")


__all__ = ["ProfileModel", "UserModel", "UserRoleModel"]
