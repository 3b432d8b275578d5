"""Read access to user contacts, preferences and roles."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from issue_notifier.domain.entities import Contact
from issue_notifier.infrastructure.models import ProfileModel, UserModel, UserRoleModel


class UserRepository:
    """Provide read operations over users, profiles and user roles."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_roles(self, user_id: str) -> list[str]:
        query = self.session.query(UserRoleModel.role).filter(UserRoleModel.user_id == user_id)
        return [role for (role,) in query.all()]

    def get_contact_map(self, user_ids: Iterable[str]) -> dict[str, Contact]:
        unique_ids = {user_id for user_id in user_ids if user_id}
        if not unique_ids:
            return {}

        query = (
            self.session.query(UserModel.id, UserModel.email, ProfileModel.notification_email)
            .outerjoin(ProfileModel, ProfileModel.user_id == UserModel.id)
            .filter(UserModel.id.in_(unique_ids))
        )
        return {
            user_id: Contact(
                user_id=user_id,
                email=email or None,
                # No profile row means the user never changed the default.
                wants_email=notification_email is not False,
            )
            for user_id, email, notification_email in query.all()
        }


__all__ = ["UserRepository"]
