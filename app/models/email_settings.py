"""Pydantic models for the singleton ``settings`` row.

Holds the SMTP credentials and the email subject/body templates used by the
notifier.  Every field is nullable: ``None`` means "not configured yet".
"""

from datetime import datetime
from typing import Any

from pydantic import field_validator

from app.models.base import CamelModel, blank_to_none


class EmailSettingsUpdate(CamelModel):
    """Payload for replacing the settings record.

    Replace semantics: any field left out is stored as ``None``.
    """
    smtp_host: str | None = None
    smtp_port: int | None = None
    smtp_username: str | None = None
    smtp_password: str | None = None
    smtp_secure: bool | None = None
    email_subject: str | None = None
    email_template: str | None = None
    from_name: str | None = None
    from_email: str | None = None

    @field_validator(
        "smtp_host",
        "smtp_port",
        "smtp_username",
        "smtp_password",
        "email_subject",
        "email_template",
        "from_name",
        "from_email",
        mode="before",
    )
    @classmethod
    def _clear_blank(cls, value: Any) -> Any:
        return blank_to_none(value)


class EmailSettings(EmailSettingsUpdate):
    """Stored settings record."""
    created_at: datetime
    updated_at: datetime
