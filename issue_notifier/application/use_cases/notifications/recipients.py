"""Compute the audience of a transition notification."""

from __future__ import annotations

from typing import Iterable, Mapping

from issue_notifier.domain.entities import Contact, Issue, Recipient


def resolve_recipients(
    issue: Issue,
    follower_ids: Iterable[str],
    contacts: Mapping[str, Contact],
) -> list[Recipient]:
    """Return the reporter followed by every distinct follower.

    Each user appears once; the reporter keeps the reporter role even when the
    follower relation lists them too. An email address is claimed by the first
    recipient that will actually be emailed, so later duplicates receive the
    in-app notification only.
    """

    recipients: list[Recipient] = []
    seen_users: set[str] = set()
    claimed_addresses: set[str] = set()

    def _append(user_id: str, *, is_reporter: bool, preferred_email: str | None) -> None:
        contact = contacts.get(user_id)
        wants_email = contact.wants_email if contact is not None else True
        email = preferred_email or (contact.email if contact is not None else None)
        if email and wants_email:
            address = email.strip().lower()
            if address in claimed_addresses:
                email = None
            else:
                claimed_addresses.add(address)
        recipients.append(
            Recipient(
                user_id=user_id,
                email=email or None,
                wants_email=wants_email,
                is_reporter=is_reporter,
            )
        )
        seen_users.add(user_id)

    if issue.reporter_id:
        _append(issue.reporter_id, is_reporter=True, preferred_email=issue.reporter_email)

    for follower_id in follower_ids:
        if not follower_id or follower_id in seen_users:
            continue
        _append(follower_id, is_reporter=False, preferred_email=None)

    return recipients


__all__ = ["resolve_recipients"]
