"""Transition notification use case: validate, resolve, compose and fan out."""

from .composer import ComposedMessage, compose_message, render_email_html
from .dispatcher import TransitionDispatcher
from .errors import (
    DispatchError,
    InvalidPayload,
    NotFound,
    Unauthenticated,
    Unauthorized,
)
from .policies import (
    ADMIN_ROLES,
    DEFAULT_POLICIES,
    STATUS_POLICY,
    VERIFICATION_POLICY,
    VERIFIER_ROLES,
    TransitionPolicy,
)
from .ports import (
    EmailSendStatus,
    EmailSender,
    IdentityVerifier,
    IssueDirectory,
    NotificationSink,
    UserDirectory,
)
from .recipients import resolve_recipients
from .validators import parse_transition

__all__ = [
    "ADMIN_ROLES",
    "ComposedMessage",
    "DEFAULT_POLICIES",
    "DispatchError",
    "EmailSendStatus",
    "EmailSender",
    "IdentityVerifier",
    "InvalidPayload",
    "IssueDirectory",
    "NotFound",
    "NotificationSink",
    "STATUS_POLICY",
    "TransitionDispatcher",
    "TransitionPolicy",
    "Unauthenticated",
    "Unauthorized",
    "UserDirectory",
    "VERIFICATION_POLICY",
    "VERIFIER_ROLES",
    "compose_message",
    "parse_transition",
    "render_email_html",
    "resolve_recipients",
]
