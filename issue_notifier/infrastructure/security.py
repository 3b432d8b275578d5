"""Helpers for minting and verifying caller JWT credentials."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from issue_notifier.config import Settings, get_settings
from issue_notifier.domain.entities import CallerIdentity


def create_access_token(
    data: dict,
    expires_delta: timedelta | None = None,
    *,
    settings: Settings | None = None,
) -> str:
    settings = settings or get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode(
        {**data, "exp": expire}, settings.secret_key, algorithm=settings.jwt_algorithm
    )


def decode_access_token(token: str, *, settings: Settings | None = None) -> dict:
    settings = settings or get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


class JWTIdentityVerifier:
    """Resolve callers from signed JWTs without touching the data store.

    The ``sub`` claim carries the user id; ``email`` is optional.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def verify(self, credential: str) -> CallerIdentity:
        payload = decode_access_token(credential, settings=self._settings)
        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise ValueError("Token subject is missing")
        email = payload.get("email")
        return CallerIdentity(
            user_id=subject,
            email=email if isinstance(email, str) else None,
        )


__all__ = [
    "JWTIdentityVerifier",
    "create_access_token",
    "decode_access_token",
]
