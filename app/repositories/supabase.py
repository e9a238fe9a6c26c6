"""Supabase (PostgREST) storage backend.

Each mutating operation maps to a single PostgREST statement, so row-level
atomicity comes from PostgreSQL.  The keyword filter needs to look inside the
``external_links`` JSONB array, which PostgREST filters cannot express, so
listing goes through the ``search_talents`` / ``count_talents`` PL/pgSQL
functions defined in ``supabase/schema.sql``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from app.core.constants import (
    PG_UNIQUE_VIOLATION,
    SETTINGS_ROW_ID,
    SETTINGS_TABLE,
    TALENTS_TABLE,
    USERS_TABLE,
)
from app.core.errors import (
    ConflictError,
    InvalidDataError,
    NotFoundError,
    TransientStoreError,
)
from app.models.email_settings import EmailSettings, EmailSettingsUpdate
from app.models.talent import Talent, TalentCreate, TalentUpdate
from app.models.user import User, UserRegister
from app.repositories.base import (
    SettingsStore,
    TalentRepository,
    UserStore,
    check_paging,
    normalize_keyword,
)

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _execute(query: Any, operation: str, conflict_message: str | None = None) -> Any:
    """Run a PostgREST query, translating driver failures into domain errors.

    A unique violation becomes ``ConflictError`` when *conflict_message* is
    given; every other failure becomes ``TransientStoreError``.
    """
    try:
        return query.execute()
    except APIError as exc:
        if conflict_message and exc.code == PG_UNIQUE_VIOLATION:
            raise ConflictError(conflict_message) from exc
        logger.error(
            "supabase_query_failed",
            extra={"operation": operation, "error_message": str(exc)},
        )
        raise TransientStoreError(f"Storage call failed: {operation}") from exc
    except httpx.HTTPError as exc:
        logger.error(
            "supabase_unreachable",
            extra={"operation": operation, "error_message": str(exc)},
        )
        raise TransientStoreError(f"Storage unreachable: {operation}") from exc


def _scalar(data: Any) -> int:
    """Extract an integer returned by an RPC (bare value or single-row list)."""
    if isinstance(data, list):
        if not data:
            return 0
        data = data[0]
        if isinstance(data, dict):
            data = next(iter(data.values()), 0)
    return int(data or 0)


class SupabaseTalentRepository(TalentRepository):
    """Talent repository over the ``talents`` table."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def _table(self) -> Any:
        return self._client.table(TALENTS_TABLE)

    def list_talents(
        self,
        page: int,
        limit: int,
        keyword: str | None = None,
        email_only: bool = False,
    ) -> tuple[list[Talent], int]:
        offset = check_paging(page, limit)
        params: dict[str, Any] = {
            "p_keyword": normalize_keyword(keyword),
            "p_email_only": email_only,
        }

        count_result = _execute(
            self._client.rpc("count_talents", params), "count_talents"
        )
        total = _scalar(count_result.data)

        rows_result = _execute(
            self._client.rpc(
                "search_talents",
                {**params, "p_offset": offset, "p_limit": limit},
            ),
            "search_talents",
        )
        talents = [Talent(**row) for row in rows_result.data or []]
        return talents, total

    def _find_one(self, column: str, value: Any, operation: str) -> Talent | None:
        result = _execute(
            self._table().select("*").eq(column, value).limit(1),
            operation,
        )
        if not result.data:
            return None
        return Talent(**result.data[0])

    def get_by_id(self, talent_pk: int) -> Talent:
        talent = self._find_one("id", talent_pk, "get_talent")
        if talent is None:
            raise NotFoundError(f"Talent not found: {talent_pk}")
        return talent

    def get_by_talent_id(self, talent_id: str) -> Talent:
        talent = self._find_one("talent_id", talent_id, "get_talent_by_talent_id")
        if talent is None:
            raise NotFoundError(f"Talent not found: {talent_id}")
        return talent

    def create(self, payload: TalentCreate) -> Talent:
        conflict = f"Talent already exists: {payload.talent_id}"
        if self._find_one("talent_id", payload.talent_id, "create_talent_check"):
            raise ConflictError(conflict)

        now = _now_iso()
        row = {**payload.model_dump(mode="json"), "created_at": now, "updated_at": now}
        result = _execute(
            self._table().insert(row), "create_talent", conflict_message=conflict
        )
        talent = Talent(**result.data[0])
        logger.info(
            "talent_created",
            extra={"talent_pk": talent.id, "talent_id": talent.talent_id},
        )
        return talent

    def update(self, talent_pk: int, payload: TalentUpdate) -> Talent:
        changes = payload.model_dump(mode="json", exclude_unset=True)
        if "full_name" in changes and not changes["full_name"]:
            raise InvalidDataError("fullName cannot be cleared")

        result = _execute(
            self._table()
            .update({**changes, "updated_at": _now_iso()})
            .eq("id", talent_pk),
            "update_talent",
        )
        if not result.data:
            raise NotFoundError(f"Talent not found: {talent_pk}")

        logger.info(
            "talent_updated",
            extra={"talent_pk": talent_pk, "fields": sorted(changes)},
        )
        return Talent(**result.data[0])

    def delete(self, talent_pk: int) -> bool:
        result = _execute(self._table().delete().eq("id", talent_pk), "delete_talent")
        removed = bool(result.data)
        if removed:
            logger.info("talent_deleted", extra={"talent_pk": talent_pk})
        return removed

    def _exists(self, talent_pk: int) -> bool:
        result = _execute(
            self._table().select("id").eq("id", talent_pk).limit(1),
            "talent_exists",
        )
        return bool(result.data)

    def get_previous(self, talent_pk: int) -> Talent | None:
        if not self._exists(talent_pk):
            return None
        result = _execute(
            self._table()
            .select("*")
            .lt("id", talent_pk)
            .order("id", desc=True)
            .limit(1),
            "previous_talent",
        )
        return Talent(**result.data[0]) if result.data else None

    def get_next(self, talent_pk: int) -> Talent | None:
        if not self._exists(talent_pk):
            return None
        result = _execute(
            self._table()
            .select("*")
            .gt("id", talent_pk)
            .order("id")
            .limit(1),
            "next_talent",
        )
        return Talent(**result.data[0]) if result.data else None


class SupabaseSettingsStore(SettingsStore):
    """Settings singleton stored as row ``id = 1`` of the ``settings`` table."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def get(self) -> EmailSettings | None:
        result = _execute(
            self._client.table(SETTINGS_TABLE)
            .select("*")
            .eq("id", SETTINGS_ROW_ID)
            .limit(1),
            "get_settings",
        )
        if not result.data:
            return None
        return EmailSettings(**result.data[0])

    def replace(self, payload: EmailSettingsUpdate) -> EmailSettings:
        # created_at is left out so the column default applies on insert and
        # the stored value survives later upserts
        row = {
            **payload.model_dump(mode="json"),
            "id": SETTINGS_ROW_ID,
            "updated_at": _now_iso(),
        }
        result = _execute(
            self._client.table(SETTINGS_TABLE).upsert(row, on_conflict="id"),
            "replace_settings",
        )
        logger.info("settings_replaced")
        return EmailSettings(**result.data[0])


class SupabaseUserStore(UserStore):
    """Users stored in the ``users`` table (unique ``email``)."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def _find_one(self, column: str, value: str, operation: str) -> User | None:
        result = _execute(
            self._client.table(USERS_TABLE).select("*").eq(column, value).limit(1),
            operation,
        )
        if not result.data:
            return None
        return User(**result.data[0])

    def get_by_id(self, user_id: UUID) -> User | None:
        return self._find_one("id", str(user_id), "get_user")

    def get_by_email(self, email: str) -> User | None:
        return self._find_one("email", email.strip().lower(), "get_user_by_email")

    def create(self, payload: UserRegister, password_hash: str) -> User:
        row = {
            "email": payload.email,
            "password_hash": password_hash,
            "first_name": payload.first_name,
            "last_name": payload.last_name,
        }
        result = _execute(
            self._client.table(USERS_TABLE).insert(row),
            "create_user",
            conflict_message=f"User already exists: {payload.email}",
        )
        return User(**result.data[0])
