"""Transactional email delivery via SendGrid."""

from __future__ import annotations

import json
import logging
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from issue_notifier.application.use_cases.notifications import EmailSendStatus
from issue_notifier.config import Settings

logger = logging.getLogger(__name__)


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, "", b""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        messages: list[str] = []
        for item in parsed.get("errors") or []:
            if not isinstance(item, dict) or not item.get("message"):
                continue
            if item.get("field"):
                messages.append(f"{item['field']}: {item['message']}")
            else:
                messages.append(str(item["message"]))
        if messages:
            return "; ".join(messages)
        return json.dumps(parsed, default=str)

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


class SendGridEmailSender:
    """Send HTML email through SendGrid; a no-op when credentials are absent."""

    def __init__(self, settings: Settings) -> None:
        self._api_key = settings.sendgrid_api_key
        self._sender = settings.sendgrid_sender
        self._sender_name = settings.email_sender_name
        self._timeout = settings.delivery_timeout_seconds

    @property
    def enabled(self) -> bool:
        return bool(self._api_key and self._sender)

    def send(self, to: str, subject: str, html_content: str) -> EmailSendStatus:
        if not self.enabled:
            logger.info("SendGrid configuration incomplete; skipping email to %s", to)
            return EmailSendStatus.SKIPPED

        message = Mail(
            from_email=(self._sender, self._sender_name),
            to_emails=to,
            subject=subject,
            html_content=html_content,
        )

        try:
            client = SendGridAPIClient(self._api_key)
            # Bounds each HTTP request made by the underlying python_http_client.
            client.client.timeout = self._timeout
            response = client.send(message)
        except Exception as exc:
            self._log_failure(to, getattr(exc, "status_code", None), getattr(exc, "body", None), exc)
            return EmailSendStatus.FAILED

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            self._log_failure(to, status_code, getattr(response, "body", None))
            return EmailSendStatus.FAILED

        logger.info("Email sent to %s with status %s", to, status_code)
        return EmailSendStatus.SENT

    @staticmethod
    def _log_failure(
        to: str, status_code: Any, body: Any, exc: Exception | None = None
    ) -> None:
        details = _extract_sendgrid_error_details(body)
        if status_code and details:
            logger.error(
                "SendGrid request for %s failed with status %s: %s", to, status_code, details
            )
        elif status_code:
            logger.error("SendGrid request for %s failed with status %s", to, status_code)
        elif details:
            logger.error("SendGrid request for %s failed: %s", to, details)
        else:
            logger.error("Error sending email to %s via SendGrid: %s", to, exc)


__all__ = ["SendGridEmailSender"]
