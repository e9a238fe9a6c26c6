"""Outbound talent email.

Renders the configured subject/body templates for one talent and sends the
message through the configured SMTP server with aiosmtplib.

Preconditions (talent email present, SMTP host/username/password present)
are hard failures reported as ``PreconditionFailedError``; nothing is retried.
"""

from __future__ import annotations

import logging
from email.message import EmailMessage
from email.utils import formataddr

import aiosmtplib

from app.core.config import settings
from app.core.constants import (
    DEFAULT_EMAIL_SUBJECT,
    DEFAULT_EMAIL_TEMPLATE,
    DEFAULT_FROM_NAME,
    NAME_PLACEHOLDER,
    SMTP_SSL_PORT,
    SMTP_SUBMISSION_PORT,
)
from app.core.errors import EmailDeliveryError, PreconditionFailedError
from app.models.email_settings import EmailSettings
from app.models.talent import Talent

logger = logging.getLogger(__name__)


def render_template(template: str, full_name: str) -> str:
    """Replace every ``{{name}}`` in *template* with *full_name*."""
    return template.replace(NAME_PLACEHOLDER, full_name)


def check_preconditions(talent: Talent, email_settings: EmailSettings | None) -> EmailSettings:
    """Validate inputs and return the settings narrowed to non-None."""
    if not talent.email:
        raise PreconditionFailedError("Talent has no email address")
    if (
        email_settings is None
        or not email_settings.smtp_host
        or not email_settings.smtp_username
        or not email_settings.smtp_password
    ):
        raise PreconditionFailedError("SMTP settings not configured")
    return email_settings


def build_message(talent: Talent, email_settings: EmailSettings) -> EmailMessage:
    """Compose the email for *talent* from the stored templates."""
    subject = render_template(
        email_settings.email_subject or DEFAULT_EMAIL_SUBJECT, talent.full_name
    )
    body = render_template(
        email_settings.email_template or DEFAULT_EMAIL_TEMPLATE, talent.full_name
    )
    sender = formataddr(
        (
            email_settings.from_name or DEFAULT_FROM_NAME,
            email_settings.from_email or email_settings.smtp_username or "",
        )
    )

    message = EmailMessage()
    message["From"] = sender
    message["To"] = talent.email or ""
    message["Subject"] = subject
    message.set_content(body)
    return message


def smtp_port(email_settings: EmailSettings) -> int:
    if email_settings.smtp_port:
        return email_settings.smtp_port
    return SMTP_SSL_PORT if email_settings.smtp_secure else SMTP_SUBMISSION_PORT


async def send_talent_email(talent: Talent, email_settings: EmailSettings | None) -> None:
    """Send the templated email to *talent*.

    Raises ``PreconditionFailedError`` before any network activity when the
    inputs are incomplete or cannot go into headers, and
    ``EmailDeliveryError`` when SMTP fails.
    """
    configured = check_preconditions(talent, email_settings)
    try:
        message = build_message(talent, configured)
    except ValueError as exc:
        # header values reject CR/LF (multi-line subject template or name)
        logger.warning(
            "email_headers_invalid",
            extra={"talent_pk": talent.id, "error_message": str(exc)},
        )
        raise PreconditionFailedError("Email headers may not contain line breaks") from exc
    port = smtp_port(configured)

    try:
        await aiosmtplib.send(
            message,
            hostname=configured.smtp_host,
            port=port,
            username=configured.smtp_username,
            password=configured.smtp_password,
            use_tls=bool(configured.smtp_secure),
            timeout=settings.SMTP_TIMEOUT_SECONDS,
        )
    except (aiosmtplib.SMTPException, OSError) as exc:
        logger.error(
            "email_send_failed",
            extra={
                "talent_pk": talent.id,
                "smtp_host": configured.smtp_host,
                "smtp_port": port,
                "error_message": str(exc),
            },
        )
        raise EmailDeliveryError("Failed to send email") from exc

    logger.info(
        "email_sent",
        extra={"talent_pk": talent.id, "smtp_host": configured.smtp_host},
    )
