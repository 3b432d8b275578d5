"""Endpoints that fan out issue status and verification notifications."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool

from issue_notifier.application.use_cases.notifications import (
    InvalidPayload,
    NotFound,
    TransitionDispatcher,
    Unauthenticated,
    Unauthorized,
)
from issue_notifier.domain.entities import TransitionKind
from issue_notifier.interfaces.api.dependencies import (
    get_bearer_credential,
    get_transition_dispatcher,
)
from issue_notifier.interfaces.api.schemas import ErrorResponse, NotifyResponse

router = APIRouter(tags=["notify"])
logger = logging.getLogger(__name__)

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
    status.HTTP_403_FORBIDDEN: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}

_SUCCESS_MESSAGES = {
    TransitionKind.STATUS: "Notifications sent",
    TransitionKind.VERIFICATION: "Verification notifications sent",
}


def _dispatch(
    dispatcher: TransitionDispatcher,
    kind: TransitionKind,
    body: bytes,
    credential: str | None,
) -> NotifyResponse:
    try:
        result = dispatcher.dispatch(kind, body, credential)
    except Unauthenticated as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
    except InvalidPayload as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Unauthorized as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    except NotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Error in notify-%s-change handler", kind.value)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred",
        ) from exc

    return NotifyResponse(
        success=True,
        message=_SUCCESS_MESSAGES[kind],
        notifications_created=result.notifications_created,
        emails_sent=result.emails_sent,
    )


@router.post(
    "/notify-status-change", response_model=NotifyResponse, responses=_ERROR_RESPONSES
)
async def notify_status_change(
    request: Request,
    credential: str | None = Depends(get_bearer_credential),
    dispatcher: TransitionDispatcher = Depends(get_transition_dispatcher),
) -> NotifyResponse:
    """Notify the reporter and followers that an issue changed status."""

    body = await request.body()
    return await run_in_threadpool(
        _dispatch, dispatcher, TransitionKind.STATUS, body, credential
    )


@router.post(
    "/notify-verification-change",
    response_model=NotifyResponse,
    responses=_ERROR_RESPONSES,
)
async def notify_verification_change(
    request: Request,
    credential: str | None = Depends(get_bearer_credential),
    dispatcher: TransitionDispatcher = Depends(get_transition_dispatcher),
) -> NotifyResponse:
    """Notify the reporter and followers that an issue's verification changed."""

    body = await request.body()
    return await run_in_threadpool(
        _dispatch, dispatcher, TransitionKind.VERIFICATION, body, credential
    )
