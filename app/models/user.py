"""Pydantic models for the ``users`` table and auth payloads."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from app.models.base import CamelModel


class UserRegister(CamelModel):
    """Payload for POST /api/register."""
    email: str = Field(min_length=3)
    # bcrypt refuses inputs over 72 bytes
    password: str = Field(min_length=6, max_length=72)
    first_name: str | None = None
    last_name: str | None = None

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("password")
    @classmethod
    def _fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > 72:
            raise ValueError("password must be at most 72 bytes")
        return value


class UserLogin(CamelModel):
    """Payload for POST /api/login."""
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class UserPublic(CamelModel):
    """User projection safe to return to clients."""
    id: UUID
    email: str
    first_name: str | None = None
    last_name: str | None = None
    created_at: datetime


class User(CamelModel):
    """Full user record returned from storage."""
    id: UUID
    email: str
    password_hash: str
    first_name: str | None = None
    last_name: str | None = None
    created_at: datetime
    updated_at: datetime

    def public(self) -> UserPublic:
        return UserPublic.model_validate(self.model_dump())


class AuthResponse(CamelModel):
    """Response for login and registration."""
    user: UserPublic
    message: str
