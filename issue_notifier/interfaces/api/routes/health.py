from fastapi import APIRouter, Depends

from issue_notifier.config import Settings, get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health(settings: Settings = Depends(get_settings)) -> dict:
    """Report liveness and whether the email channel is configured."""

    return {"status": "ok", "email_enabled": settings.email_enabled}
