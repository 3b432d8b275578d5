"""Domain entity representing a reported issue."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Issue:
    """Snapshot of a reported issue read at dispatch time."""

    id: str
    title: str
    description: str
    address: str | None
    reporter_id: str | None
    reporter_email: str | None
    status: str
    verification_status: str | None = None


__all__ = ["Issue"]
