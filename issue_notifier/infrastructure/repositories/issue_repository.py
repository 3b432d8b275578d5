"""Read access to issues and their follower relation."""

from __future__ import annotations

from sqlalchemy.orm import Session

from issue_notifier.domain.entities import Issue
from issue_notifier.infrastructure.models import IssueFollowModel, IssueModel


class IssueRepository:
    """Provide read operations for :class:`Issue` snapshots."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, issue_id: str) -> Issue | None:
        model = self.session.get(IssueModel, issue_id)
        return self._to_entity(model) if model else None

    def list_follower_ids(self, issue_id: str) -> list[str]:
        query = (
            self.session.query(IssueFollowModel.user_id)
            .filter(IssueFollowModel.issue_id == issue_id)
            .order_by(IssueFollowModel.created_at.asc(), IssueFollowModel.id.asc())
        )
        return [user_id for (user_id,) in query.all()]

    @staticmethod
    def _to_entity(model: IssueModel) -> Issue:
        return Issue(
            id=model.id,
            title=model.title,
            description=model.description or "",
            address=model.address,
            reporter_id=model.reporter_id,
            reporter_email=model.reporter_email,
            status=model.status,
            verification_status=model.verification_status,
        )


__all__ = ["IssueRepository"]
