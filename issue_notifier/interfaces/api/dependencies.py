"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from issue_notifier.application.use_cases.notifications import TransitionDispatcher
from issue_notifier.config import Settings, get_settings
from issue_notifier.domain.entities import CallerIdentity
from issue_notifier.infrastructure.database import SessionLocal
from issue_notifier.infrastructure.email import SendGridEmailSender
from issue_notifier.infrastructure.notifications import (
    SqlIssueDirectory,
    SqlNotificationSink,
    SqlUserDirectory,
)
from issue_notifier.infrastructure.security import JWTIdentityVerifier

# Missing credentials are reported by the dispatcher itself.
bearer_scheme = HTTPBearer(auto_error=False)


def get_bearer_credential(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    """Return the raw bearer token sent by the caller, if any."""

    if credentials is None:
        return None
    return credentials.credentials


def get_transition_dispatcher(
    settings: Settings = Depends(get_settings),
) -> TransitionDispatcher:
    """Return a dispatcher wired to the database and SendGrid."""

    return TransitionDispatcher(
        identity_verifier=JWTIdentityVerifier(settings),
        issues=SqlIssueDirectory(SessionLocal),
        users=SqlUserDirectory(SessionLocal),
        notifications=SqlNotificationSink(SessionLocal),
        email_sender=SendGridEmailSender(settings),
        delivery_timeout=settings.delivery_timeout_seconds,
        max_workers=settings.dispatch_max_workers,
    )


def get_current_caller(
    token: str | None = Depends(get_bearer_credential),
    settings: Settings = Depends(get_settings),
) -> CallerIdentity:
    """Return the authenticated caller for inbox endpoints."""

    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return JWTIdentityVerifier(settings).verify(token)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized - invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
