"""Pydantic models describing notify endpoint responses."""

from __future__ import annotations

from pydantic import BaseModel


class NotifyResponse(BaseModel):
    """Summary returned after a dispatch."""

    success: bool = True
    message: str
    notifications_created: int
    emails_sent: int


class ErrorResponse(BaseModel):
    error: str


__all__ = ["ErrorResponse", "NotifyResponse"]
