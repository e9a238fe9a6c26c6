"""In-memory storage backend.

Process-lifetime dictionaries guarded by a ``threading.Lock``.  Records are
copied on the way in and out so callers can never mutate stored state or
observe a half-applied update.
"""

from __future__ import annotations

import bisect
import logging
import threading
from datetime import datetime, timezone
from uuid import UUID, uuid4

from app.core.errors import ConflictError, InvalidDataError, NotFoundError
from app.models.email_settings import EmailSettings, EmailSettingsUpdate
from app.models.talent import Talent, TalentCreate, TalentUpdate
from app.models.user import User, UserRegister
from app.repositories.base import (
    SettingsStore,
    TalentRepository,
    UserStore,
    check_paging,
    normalize_keyword,
    talent_matches,
)

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryTalentRepository(TalentRepository):
    """Talent repository backed by a dict keyed on the surrogate id."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._talents: dict[int, Talent] = {}
        self._next_pk = 1

    def _ordered(self) -> list[Talent]:
        return [self._talents[pk] for pk in sorted(self._talents)]

    def list_talents(
        self,
        page: int,
        limit: int,
        keyword: str | None = None,
        email_only: bool = False,
    ) -> tuple[list[Talent], int]:
        offset = check_paging(page, limit)
        keyword = normalize_keyword(keyword)
        with self._lock:
            matched = [
                talent for talent in self._ordered()
                if talent_matches(talent, keyword, email_only)
            ]
            window = [t.model_copy(deep=True) for t in matched[offset:offset + limit]]
        return window, len(matched)

    def get_by_id(self, talent_pk: int) -> Talent:
        with self._lock:
            talent = self._talents.get(talent_pk)
            if talent is None:
                raise NotFoundError(f"Talent not found: {talent_pk}")
            return talent.model_copy(deep=True)

    def get_by_talent_id(self, talent_id: str) -> Talent:
        with self._lock:
            for talent in self._talents.values():
                if talent.talent_id == talent_id:
                    return talent.model_copy(deep=True)
        raise NotFoundError(f"Talent not found: {talent_id}")

    def create(self, payload: TalentCreate) -> Talent:
        with self._lock:
            if any(t.talent_id == payload.talent_id for t in self._talents.values()):
                raise ConflictError(f"Talent already exists: {payload.talent_id}")

            now = _now()
            talent = Talent.model_validate(
                {
                    **payload.model_dump(),
                    "id": self._next_pk,
                    "created_at": now,
                    "updated_at": now,
                }
            )
            self._talents[talent.id] = talent
            self._next_pk += 1

        logger.info(
            "talent_created",
            extra={"talent_pk": talent.id, "talent_id": talent.talent_id},
        )
        return talent.model_copy(deep=True)

    def update(self, talent_pk: int, payload: TalentUpdate) -> Talent:
        changes = payload.changes()
        if "full_name" in changes and not changes["full_name"]:
            raise InvalidDataError("fullName cannot be cleared")

        with self._lock:
            current = self._talents.get(talent_pk)
            if current is None:
                raise NotFoundError(f"Talent not found: {talent_pk}")

            updated = Talent.model_validate(
                {**current.model_dump(), **changes, "updated_at": _now()}
            )
            self._talents[talent_pk] = updated

        logger.info(
            "talent_updated",
            extra={"talent_pk": talent_pk, "fields": sorted(changes)},
        )
        return updated.model_copy(deep=True)

    def delete(self, talent_pk: int) -> bool:
        with self._lock:
            removed = self._talents.pop(talent_pk, None)
        if removed is not None:
            logger.info("talent_deleted", extra={"talent_pk": talent_pk})
        return removed is not None

    def get_previous(self, talent_pk: int) -> Talent | None:
        with self._lock:
            if talent_pk not in self._talents:
                return None
            pks = sorted(self._talents)
            idx = bisect.bisect_left(pks, talent_pk)
            if idx == 0:
                return None
            return self._talents[pks[idx - 1]].model_copy(deep=True)

    def get_next(self, talent_pk: int) -> Talent | None:
        with self._lock:
            if talent_pk not in self._talents:
                return None
            pks = sorted(self._talents)
            idx = bisect.bisect_right(pks, talent_pk)
            if idx >= len(pks):
                return None
            return self._talents[pks[idx]].model_copy(deep=True)


class InMemorySettingsStore(SettingsStore):
    """Settings singleton held in a single attribute."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._settings: EmailSettings | None = None

    def get(self) -> EmailSettings | None:
        with self._lock:
            if self._settings is None:
                return None
            return self._settings.model_copy()

    def replace(self, payload: EmailSettingsUpdate) -> EmailSettings:
        with self._lock:
            now = _now()
            created_at = self._settings.created_at if self._settings else now
            # model_dump() without exclude_unset: omitted fields become None
            self._settings = EmailSettings.model_validate(
                {**payload.model_dump(), "created_at": created_at, "updated_at": now}
            )
            stored = self._settings.model_copy()

        logger.info("settings_replaced")
        return stored


class InMemoryUserStore(UserStore):
    """Users keyed by UUID, with a linear scan for email lookups."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: dict[UUID, User] = {}

    def get_by_id(self, user_id: UUID) -> User | None:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy() if user else None

    def get_by_email(self, email: str) -> User | None:
        email = email.strip().lower()
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return user.model_copy()
        return None

    def create(self, payload: UserRegister, password_hash: str) -> User:
        with self._lock:
            if any(u.email == payload.email for u in self._users.values()):
                raise ConflictError(f"User already exists: {payload.email}")

            now = _now()
            user = User(
                id=uuid4(),
                email=payload.email,
                password_hash=password_hash,
                first_name=payload.first_name,
                last_name=payload.last_name,
                created_at=now,
                updated_at=now,
            )
            self._users[user.id] = user
        return user.model_copy()
