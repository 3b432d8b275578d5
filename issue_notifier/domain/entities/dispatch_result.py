"""Summary returned to the caller after one dispatch."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DispatchResult:
    """Counts of deliveries performed by a dispatch."""

    recipients: int
    notifications_created: int
    emails_sent: int


__all__ = ["DispatchResult"]
