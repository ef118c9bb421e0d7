"""Unit tests for the SendGrid email helpers."""

from __future__ import annotations

import json
import types

import pytest

from taskmaster.infrastructure import email as email_module


class DummySettings:
    sendgrid_api_key = "SG.fake"
    sendgrid_sender = "sender@example.com"


class RecordingClient:
    """Stand-in for ``SendGridAPIClient`` that accepts every message."""

    sent: list = []

    def __init__(self, api_key: str) -> None:
        self.api_key = api_key

    def send(self, message):
        RecordingClient.sent.append((self.api_key, message))
        return types.SimpleNamespace(status_code=202, body=b"")


def test_send_email_without_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    """When SendGrid settings are missing the helper should exit early."""

    class Unconfigured:
        sendgrid_api_key = None
        sendgrid_sender = None

    class UnexpectedClient:
        def __init__(self, api_key: str) -> None:
            raise AssertionError("no client expected")

    monkeypatch.setattr(email_module, "get_settings", lambda: Unconfigured())
    monkeypatch.setattr(email_module, "SendGridAPIClient", UnexpectedClient)

    assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is False


def test_send_email_success(monkeypatch: pytest.MonkeyPatch) -> None:
    """An accepted SendGrid response should return ``True``."""

    RecordingClient.sent = []
    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", RecordingClient)

    assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is True

    [(api_key, message)] = RecordingClient.sent
    assert api_key == "SG.fake"
    payload = message.get()
    assert payload["subject"] == "Subject"
    assert payload["from"]["email"] == "sender@example.com"
    assert payload["personalizations"][0]["to"] == [{"email": "user@example.com"}]


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


def test_send_email_unsuccessful_response(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    class RejectingClient(RecordingClient):
        def send(self, message):
            return types.SimpleNamespace(status_code=400, body=b"bad request")

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", RejectingClient)

    with caplog.at_level("ERROR"):
        assert email_module.send_email("S", "<p>B</p>", "user@example.com") is False

    assert "status 400: bad request" in caplog.text


def test_send_email_connection_error(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    class UnreachableClient(RecordingClient):
        def send(self, message):
            raise ConnectionError("connection refused")

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", UnreachableClient)

    with caplog.at_level("ERROR"):
        assert email_module.send_email("S", "<p>B</p>", "user@example.com") is False

    assert "SendGrid request failed" in caplog.text


def test_assignment_email_escapes_user_content(monkeypatch: pytest.MonkeyPatch) -> None:
    sent = {}

    def _capture(subject, html_content, recipient):
        sent.update(subject=subject, html=html_content, recipient=recipient)
        return True

    monkeypatch.setattr(email_module, "send_email", _capture)

    assert email_module.send_task_assignment_email(
        "bob@example.com",
        "<b>Fix</b>",
        "Use <script>",
        "Ana Lopez",
        "http://localhost:5173/tasks/t-1",
    )

    assert sent["subject"] == "New Task Assigned: <b>Fix</b>"
    assert sent["recipient"] == "bob@example.com"
    assert "&lt;b&gt;Fix&lt;/b&gt;" in sent["html"]
    assert "<script>" not in sent["html"]
    assert 'href="http://localhost:5173/tasks/t-1"' in sent["html"]
