"""Pydantic models for the ``talents`` table and talent API payloads.

``id`` is the surrogate key assigned by storage and defines the canonical
ordering; ``talent_id`` is the external identifier, unique and immutable.
"""

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from app.models.base import CamelModel, blank_to_none


class ExternalLink(CamelModel):
    """A named link shown on the talent profile (LinkedIn, GitHub, ...)."""
    name: str
    url: str


class TalentCreate(CamelModel):
    """Payload for creating a talent (insert)."""
    talent_id: str = Field(min_length=1)
    talent_url: str | None = None
    full_name: str = Field(min_length=1)
    nationality: str | None = None
    location: str | None = None
    external_links: list[ExternalLink] = Field(default_factory=list)
    email: str | None = None
    note: str | None = None
    important: bool = False

    @field_validator("talent_id", "full_name")
    @classmethod
    def _require_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("talent_url", "nationality", "location", "email", "note", mode="before")
    @classmethod
    def _clear_blank(cls, value: Any) -> Any:
        return blank_to_none(value)

    @field_validator("external_links", mode="before")
    @classmethod
    def _links_default(cls, value: Any) -> Any:
        return value or []

    @field_validator("important", mode="before")
    @classmethod
    def _important_default(cls, value: Any) -> Any:
        return False if value is None else value


class TalentUpdate(CamelModel):
    """Partial update payload.

    Only keys present in the request are applied.  Presence is tracked by
    pydantic (``model_fields_set``), so an explicit ``null`` clears a field
    while an omitted key leaves it untouched.  ``talent_id`` and
    ``talent_url`` are not updatable and are ignored if sent.
    """
    full_name: str | None = None
    nationality: str | None = None
    location: str | None = None
    external_links: list[ExternalLink] | None = None
    email: str | None = None
    note: str | None = None
    important: bool | None = None

    @field_validator("full_name", "nationality", "location", "email", "note", mode="before")
    @classmethod
    def _clear_blank(cls, value: Any) -> Any:
        return blank_to_none(value)

    @field_validator("full_name")
    @classmethod
    def _strip_name(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None

    @field_validator("external_links", mode="before")
    @classmethod
    def _links_default(cls, value: Any) -> Any:
        return value or []

    @field_validator("important", mode="before")
    @classmethod
    def _important_default(cls, value: Any) -> Any:
        return False if value is None else value

    def changes(self) -> dict[str, Any]:
        """Return only the supplied fields, keyed by column name."""
        return self.model_dump(exclude_unset=True)


class Talent(CamelModel):
    """Full talent record returned from storage."""
    id: int
    talent_id: str
    talent_url: str | None = None
    full_name: str
    nationality: str | None = None
    location: str | None = None
    external_links: list[ExternalLink] = Field(default_factory=list)
    email: str | None = None
    note: str | None = None
    important: bool = False
    created_at: datetime
    updated_at: datetime

    @field_validator("external_links", mode="before")
    @classmethod
    def _links_default(cls, value: Any) -> Any:
        return value or []

    @field_validator("important", mode="before")
    @classmethod
    def _important_default(cls, value: Any) -> Any:
        return False if value is None else value


class TalentListResponse(CamelModel):
    """Response for GET /api/talents."""
    talents: list[Talent] = []
    total: int = 0


class TalentNavigation(CamelModel):
    """Response for GET /api/talents/{id}/navigation."""
    previous: Talent | None = None
    next: Talent | None = None
