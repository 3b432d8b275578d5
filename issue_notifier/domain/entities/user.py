"""Domain entities describing authenticated callers and their roles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

APP_ROLES: tuple[str, ...] = (
    "admin",
    "user",
    "super_admin",
    "department_admin",
    "field_worker",
    "moderator",
)


@dataclass(frozen=True)
class CallerIdentity:
    """Verified identity extracted from a caller credential."""

    user_id: str
    email: str | None = None


def has_any_role(roles: Iterable[str], allowed: Iterable[str]) -> bool:
    """Return ``True`` when one of ``roles`` is part of ``allowed``."""

    allowed_set = {role.lower() for role in allowed}
    return any(role.lower() in allowed_set for role in roles)


__all__ = ["APP_ROLES", "CallerIdentity", "has_any_role"]
