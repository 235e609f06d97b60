"""Transactional email for estate accounts and visitors, sent through SendGrid.

Every helper returns ``False`` instead of raising. Email is a side channel and
a delivery failure never fails the request that triggered it.
"""

from __future__ import annotations

import json
import logging
from html import escape
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from estategate.config import get_settings

logger = logging.getLogger(__name__)


def _describe_body(body: Any) -> str | None:
    """Return the error messages of a SendGrid response body, if any."""

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
    if isinstance(body, dict) and isinstance(body.get("errors"), list):
        messages = [
            f"{item['message']} (help: {item['help']})"
            if item.get("help")
            else str(item["message"])
            for item in body["errors"]
            if isinstance(item, dict) and item.get("message")
        ]
        return "; ".join(messages) or None
    if isinstance(body, (dict, list)):
        return json.dumps(body, default=str)
    return None


def _report_failure(status_code: Any, body: Any) -> None:
    details = _describe_body(body)
    if details:
        logger.error("SendGrid request failed with status %s: %s", status_code, details)
    else:
        logger.error("SendGrid request failed with status %s", status_code)


def _html(*paragraphs: str) -> str:
    return "".join(f"<p>{paragraph}</p>" for paragraph in paragraphs)


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Send one message with the configured SendGrid credentials.

    Skipped with an info log when SendGrid is not configured.
    """

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid is not configured; not emailing %s", recipient)
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )
    try:
        response = SendGridAPIClient(settings.sendgrid_api_key).send(message)
    except Exception as exc:  # pragma: no cover - depends on the network
        if getattr(exc, "status_code", None) is None:
            logger.exception("Could not reach SendGrid")
        else:
            _report_failure(exc.status_code, getattr(exc, "body", None))
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _report_failure(status_code, getattr(response, "body", None))
        return False
    return True


def send_temporary_password_email(email: str, password: str) -> bool:
    """Send the sign-in credentials of an account created by an admin."""

    return send_email(
        "Your Estate Gate sign-in details",
        _html(
            "Hello,",
            "An account has been created for you. Sign in with these details:",
            f"<strong>Email:</strong> {escape(email)}<br>"
            f"<strong>Temporary password:</strong> {escape(password)}",
            "You will be asked to choose a new password after signing in.",
        ),
        email,
    )


def send_visitor_invitation_email(
    email: str,
    *,
    visitor_name: str,
    resident_name: str,
    estate_name: str,
    code: str,
    expires_at: str,
) -> bool:
    """Share an invitation code with a visitor who supplied an email address."""

    return send_email(
        f"Your visitor code for {estate_name}",
        _html(
            f"Hello {escape(visitor_name)},",
            f"{escape(resident_name)} has invited you to {escape(estate_name)}.",
            f"Show this code at the gate: <strong>{escape(code)}</strong>",
            f"The code can be used once, until {escape(expires_at)}.",
        ),
        email,
    )


__all__ = [
    "send_email",
    "send_temporary_password_email",
    "send_visitor_invitation_email",
]
