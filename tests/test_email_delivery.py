"""Unit tests for the SendGrid email helper utilities."""

from __future__ import annotations

import json
import types

import pytest

from estategate.infrastructure import email as email_module


class DummySettings:
    sendgrid_api_key = "SG.fake"
    sendgrid_sender = "gate@example.com"


class RecordingClient:
    sent: list = []

    def __init__(self, api_key: str):
        self.api_key = api_key

    def send(self, message):
        RecordingClient.sent.append(message)
        return types.SimpleNamespace(status_code=202, body=None)


def test_send_email_without_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    """When SendGrid settings are missing the helper should exit early."""

    class Unconfigured:
        sendgrid_api_key = None
        sendgrid_sender = None

    monkeypatch.setattr(email_module, "get_settings", lambda: Unconfigured())

    assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is False


def test_send_email_success(monkeypatch: pytest.MonkeyPatch) -> None:
    RecordingClient.sent = []
    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", RecordingClient)

    assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is True
    assert len(RecordingClient.sent) == 1


def test_send_email_logs_forbidden_error(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    """Forbidden responses from SendGrid should surface meaningful log details."""

    class FakeForbiddenError(Exception):
        status_code = 403
        body = json.dumps(
            {"errors": [{"message": "The provided authorization grant is invalid."}]}
        ).encode()

    class FailingClient(RecordingClient):
        def send(self, message):
            raise FakeForbiddenError()

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", FailingClient)

    with caplog.at_level("ERROR"):
        result = email_module.send_email("Subject", "<p>Body</p>", "user@example.com")

    assert result is False
    assert "status 403" in caplog.text
    assert "authorization grant is invalid" in caplog.text


def test_unexpected_status_is_reported(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    class RejectingClient(RecordingClient):
        def send(self, message):
            return types.SimpleNamespace(status_code=500, body=b"boom")

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", RejectingClient)

    with caplog.at_level("ERROR"):
        assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is False

    assert "status 500: boom" in caplog.text


def test_visitor_invitation_email_escapes_content(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = {}

    def fake_send(subject, html_content, recipient):
        captured.update(subject=subject, html=html_content, recipient=recipient)
        return True

    monkeypatch.setattr(email_module, "send_email", fake_send)

    assert email_module.send_visitor_invitation_email(
        "jane@example.com",
        visitor_name="Jane <Doe>",
        resident_name="Ada Obi",
        estate_name="Palm Grove Estate",
        code="123456",
        expires_at="2030-01-02 09:00",
    )
    assert captured["recipient"] == "jane@example.com"
    assert "Palm Grove Estate" in captured["subject"]
    assert "Jane &lt;Doe&gt;" in captured["html"]
    assert "<strong>123456</strong>" in captured["html"]


def test_temporary_password_email(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = {}

    def fake_send(subject, html_content, recipient):
        captured.update(html=html_content, recipient=recipient)
        return True

    monkeypatch.setattr(email_module, "send_email", fake_send)

    assert email_module.send_temporary_password_email("admin@example.com", "Tmp#Pass1")
    assert "Tmp#Pass1" in captured["html"]
    assert captured["recipient"] == "admin@example.com"
