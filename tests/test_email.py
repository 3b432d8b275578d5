"""Unit tests for the SendGrid email sender."""

from __future__ import annotations

import json
import types

import pytest
from pydantic import ValidationError

from issue_notifier.application.use_cases.notifications import EmailSendStatus
from issue_notifier.config import Settings
from issue_notifier.infrastructure import email as email_module


def _settings(**overrides) -> Settings:
    values = {
        "secret_key": "test-secret",
        "sendgrid_api_key": "SG.fake",
        "sendgrid_sender": "alerts@example.com",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class RecordingClient:
    """Stand-in for ``SendGridAPIClient`` that captures outgoing messages."""

    messages: list = []
    instances: list = []
    status_code = 202

    def __init__(self, api_key: str):
        self.api_key = api_key
        self.client = types.SimpleNamespace(timeout=None)
        RecordingClient.instances.append(self)

    def send(self, message):
        RecordingClient.messages.append(message)
        return types.SimpleNamespace(status_code=self.status_code, body=None)


@pytest.fixture(autouse=True)
def _reset_client() -> None:
    RecordingClient.messages = []
    RecordingClient.instances = []
    RecordingClient.status_code = 202


def test_send_without_configuration_is_skipped(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without credentials no client is created and the send is reported as skipped."""

    def _fail(*_args, **_kwargs):
        raise AssertionError("client must not be created")

    monkeypatch.setattr(email_module, "SendGridAPIClient", _fail)
    sender = email_module.SendGridEmailSender(
        _settings(sendgrid_api_key=None, sendgrid_sender=None)
    )

    assert sender.enabled is False
    assert sender.send("user@example.com", "Subject", "<p>Body</p>") is EmailSendStatus.SKIPPED


def test_send_success(monkeypatch: pytest.MonkeyPatch) -> None:
    """A 2xx SendGrid response is reported as sent."""

    monkeypatch.setattr(email_module, "SendGridAPIClient", RecordingClient)
    sender = email_module.SendGridEmailSender(_settings())

    result = sender.send("user@example.com", "Issue Update", "<p>Body</p>")

    assert result is EmailSendStatus.SENT
    [message] = RecordingClient.messages
    payload = message.get()
    assert payload["from"] == {"email": "alerts@example.com", "name": "City Sentinel"}
    assert payload["subject"] == "Issue Update"
    assert payload["personalizations"][0]["to"] == [{"email": "user@example.com"}]


def test_send_non_success_status(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    """Non-2xx responses are logged and reported as failed."""

    RecordingClient.status_code = 500
    monkeypatch.setattr(email_module, "SendGridAPIClient", RecordingClient)
    sender = email_module.SendGridEmailSender(_settings())

    with caplog.at_level("ERROR"):
        result = sender.send("user@example.com", "Subject", "<p>Body</p>")

    assert result is EmailSendStatus.FAILED
    assert "status 500" in caplog.text


def test_send_logs_forbidden_error(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    """Forbidden responses from SendGrid should surface meaningful log details."""

    class FakeForbiddenError(Exception):
        status_code = 403
        body = json.dumps(
            {"errors": [{"message": "The provided authorization grant is invalid.", "field": None}]}
        ).encode()

    class FailingClient(RecordingClient):
        def send(self, message):
            raise FakeForbiddenError()

    monkeypatch.setattr(email_module, "SendGridAPIClient", FailingClient)
    sender = email_module.SendGridEmailSender(_settings())

    with caplog.at_level("ERROR"):
        result = sender.send("user@example.com", "Subject", "<p>Body</p>")

    assert result is EmailSendStatus.FAILED
    assert "status 403" in caplog.text
    assert "authorization grant is invalid" in caplog.text


def test_network_error_without_details(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    class UnreachableClient(RecordingClient):
        def send(self, message):
            raise ConnectionError("connection refused")

    monkeypatch.setattr(email_module, "SendGridAPIClient", UnreachableClient)
    sender = email_module.SendGridEmailSender(_settings())

    with caplog.at_level("ERROR"):
        assert sender.send("user@example.com", "Subject", "<p>Body</p>") is EmailSendStatus.FAILED

    assert "connection refused" in caplog.text


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        (None, None),
        (b"", None),
        ("plain failure", "plain failure"),
        ({"errors": [{"field": "from", "message": "invalid"}]}, "from: invalid"),
        (["first", "second"], "first; second"),
    ],
)
def test_extract_sendgrid_error_details(body, expected) -> None:
    assert email_module._extract_sendgrid_error_details(body) == expected


def test_sendgrid_settings_must_be_paired() -> None:
    with pytest.raises(ValidationError, match="must both be provided"):
        _settings(sendgrid_sender=None)


def test_sendgrid_sender_must_be_an_address() -> None:
    with pytest.raises(ValidationError, match="valid email address"):
        _settings(sendgrid_sender="alerts")


def test_send_bounds_provider_request_with_delivery_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(email_module, "SendGridAPIClient", RecordingClient)
    sender = email_module.SendGridEmailSender(_settings(delivery_timeout_seconds=2.5))

    sender.send("user@example.com", "Subject", "<p>Body</p>")

    [client] = RecordingClient.instances
    assert client.client.timeout == 2.5


def test_cors_origins_accept_comma_separated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://app.example.com, https://admin.example.com")

    settings = Settings(_env_file=None)

    assert settings.cors_allow_origins == ["https://app.example.com", "https://admin.example.com"]


def test_cors_origins_accept_single_origin_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://app.example.com")

    assert Settings(_env_file=None).cors_allow_origins == ["https://app.example.com"]


def test_cors_origins_default_to_any() -> None:
    assert _settings().cors_allow_origins == ["*"]
