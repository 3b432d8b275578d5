"""ORM models used by the application infrastructure."""

from .issue import IssueFollowModel, IssueModel
from .notification import NotificationModel
from .user import ProfileModel, UserModel, UserRoleModel

__all__ = [
    "IssueFollowModel",
    "IssueModel",
    "NotificationModel",
    "ProfileModel",
    "UserModel",
    "UserRoleModel",
]
