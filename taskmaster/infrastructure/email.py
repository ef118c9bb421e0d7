"""Transactional email delivered through SendGrid."""

from __future__ import annotations

import json
import logging
from html import escape
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from taskmaster.config import get_settings

logger = logging.getLogger(__name__)


def _describe_sendgrid_body(body: Any) -> str | None:
    """Return a readable summary of a SendGrid error payload."""

    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            return body

    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list):
            messages = [
                str(item["message"])
                for item in errors
                if isinstance(item, dict) and item.get("message")
            ]
            if messages:
                return "; ".join(messages)
        return json.dumps(body, default=str)
    return None


def _log_failure(source: Any) -> None:
    status_code = getattr(source, "status_code", None)
    details = _describe_sendgrid_body(getattr(source, "body", None))
    if status_code and details:
        logger.error("SendGrid request failed with status %s: %s", status_code, details)
    elif status_code:
        logger.error("SendGrid request failed with status %s", status_code)
    elif details:
        logger.error("SendGrid request failed: %s", details)
    else:
        logger.error("SendGrid request failed: %r", source)


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Send an email using the configured SendGrid credentials.

    Returns ``False`` instead of raising so callers can treat email as a
    best-effort side effect.
    """

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        response = SendGridAPIClient(settings.sendgrid_api_key).send(message)
    except Exception as exc:
        _log_failure(exc)
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _log_failure(response)
        return False

    logger.info("Email '%s' sent to %s", subject, recipient)
    return True


def send_task_assignment_email(
    to: str,
    task_title: str,
    task_description: str | None,
    assigner_name: str,
    task_url: str,
) -> bool:
    """Tell ``to`` that ``assigner_name`` assigned them a task."""

    subject = f"New Task Assigned: {task_title}"
    parts = [
        "<p>Hello,</p>",
        f"<p><strong>{escape(assigner_name)}</strong> assigned you a task.</p>",
        f"<h3>{escape(task_title)}</h3>",
    ]
    if task_description:
        parts.append(f"<p>{escape(task_description)}</p>")
    parts.append(f'<p><a href="{escape(task_url, quote=True)}">View task</a></p>')
    return send_email(subject, "".join(parts), to)


__all__ = ["send_email", "send_task_assignment_email"]
