"""Domain values describing who receives a notification."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Recipient:
    """A single notification target computed for one dispatch."""

    user_id: str
    email: str | None
    wants_email: bool
    is_reporter: bool

    @property
    def should_email(self) -> bool:
        return self.wants_email and bool(self.email)


@dataclass(frozen=True)
class Contact:
    """Contact details and preferences stored for a user."""

    user_id: str
    email: str | None
    wants_email: bool = True


__all__ = ["Contact", "Recipient"]
