"""Errors raised by the transition notification use case."""

from __future__ import annotations


class DispatchError(Exception):
    """Base class for failures that abort a dispatch before any delivery."""


class Unauthenticated(DispatchError):
    """The caller credential is missing, malformed or expired."""


class Unauthorized(DispatchError):
    """The caller is authenticated but may not notify about this issue."""


class InvalidPayload(DispatchError):
    """The transition payload failed validation."""


class NotFound(DispatchError):
    """The referenced issue does not exist."""


__all__ = [
    "DispatchError",
    "InvalidPayload",
    "NotFound",
    "Unauthenticated",
    "Unauthorized",
]
