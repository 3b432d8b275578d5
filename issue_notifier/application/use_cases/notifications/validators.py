"""Strict validation of transition payloads."""

from __future__ import annotations

import json
import re
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, field_validator

from issue_notifier.domain.entities import (
    ISSUE_STATUSES,
    VERIFICATION_STATUSES,
    Transition,
    TransitionKind,
)

from .errors import InvalidPayload

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)
MAX_VERIFIER_NAME_LENGTH = 100
MAX_VERIFIER_ROLE_LENGTH = 50


class StatusChangePayload(BaseModel):
    """Body accepted by the status change endpoint."""

    model_config = ConfigDict(extra="forbid")

    allowed_states: ClassVar[tuple[str, ...]] = ISSUE_STATUSES

    issue_id: StrictStr
    old_status: StrictStr
    new_status: StrictStr

    @field_validator("issue_id")
    @classmethod
    def _check_issue_id(cls, value: str) -> str:
        if not UUID_PATTERN.match(value):
            raise ValueError("issue_id must be a valid UUID")
        return value

    @field_validator("old_status", "new_status")
    @classmethod
    def _check_state(cls, value: str | None, info) -> str | None:
        if value is None:
            return value
        if value not in cls.allowed_states:
            prefix = "null or " if info.field_name == "old_status" and cls.allows_null_old() else ""
            raise ValueError(
                f"{info.field_name} must be {prefix}one of: {', '.join(cls.allowed_states)}"
            )
        return value

    @classmethod
    def allows_null_old(cls) -> bool:
        return False


class VerificationChangePayload(StatusChangePayload):
    """Body accepted by the verification change endpoint."""

    allowed_states: ClassVar[tuple[str, ...]] = VERIFICATION_STATUSES

    # Required key; null means the issue had never been verified before.
    old_status: StrictStr | None
    verifier_name: StrictStr | None = Field(default=None, max_length=MAX_VERIFIER_NAME_LENGTH)
    verifier_role: StrictStr | None = Field(default=None, max_length=MAX_VERIFIER_ROLE_LENGTH)

    @field_validator("verifier_name", "verifier_role")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        return value or None

    @classmethod
    def allows_null_old(cls) -> bool:
        return True


_PAYLOAD_MODELS: dict[TransitionKind, type[StatusChangePayload]] = {
    TransitionKind.STATUS: StatusChangePayload,
    TransitionKind.VERIFICATION: VerificationChangePayload,
}


def _describe_validation_error(exc: ValidationError) -> str:
    """Return a message naming the first offending field."""

    error = exc.errors()[0]
    field = ".".join(str(part) for part in error.get("loc", ())) or "body"
    if error.get("type") == "value_error":
        return str(error.get("ctx", {}).get("error", error.get("msg")))
    if error.get("type") == "extra_forbidden":
        return f"{field} is not an accepted field"
    if error.get("type") == "string_too_long":
        limit = error.get("ctx", {}).get("max_length")
        return f"{field} must be null or a string with max {limit} characters"
    if error.get("type") == "missing":
        return f"{field} is required"
    return f"{field}: {error.get('msg')}"


def _decode_body(raw_payload: Any) -> Any:
    if isinstance(raw_payload, (bytes, bytearray)):
        try:
            raw_payload = raw_payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidPayload("Failed to read request body") from exc
    if isinstance(raw_payload, str):
        if not raw_payload.strip():
            raise InvalidPayload("Empty request body")
        try:
            return json.loads(raw_payload)
        except json.JSONDecodeError as exc:
            raise InvalidPayload("Invalid JSON in request body") from exc
    return raw_payload


def parse_transition(kind: TransitionKind, raw_payload: Any) -> Transition:
    """Validate ``raw_payload`` for ``kind`` and return a :class:`Transition`.

    ``raw_payload`` may be the undecoded request body or an already decoded
    JSON value.
    """

    raw_payload = _decode_body(raw_payload)
    if not isinstance(raw_payload, dict):
        raise InvalidPayload("Request body must be an object")

    model = _PAYLOAD_MODELS[kind]
    try:
        payload = model.model_validate(raw_payload)
    except ValidationError as exc:
        raise InvalidPayload(_describe_validation_error(exc)) from exc

    return Transition(
        kind=kind,
        issue_id=payload.issue_id.lower(),
        old_state=payload.old_status,
        new_state=payload.new_status,
        actor_name=getattr(payload, "verifier_name", None),
        actor_role=getattr(payload, "verifier_role", None),
    )


__all__ = [
    "StatusChangePayload",
    "VerificationChangePayload",
    "parse_transition",
]
