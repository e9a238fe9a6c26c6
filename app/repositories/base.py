"""Storage interfaces for talents, the settings singleton and users.

Every backend implements these three abstract classes.  Route handlers only
ever see the interfaces, injected through ``app.dependencies``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from uuid import UUID

from app.core.errors import InvalidDataError
from app.models.email_settings import EmailSettings, EmailSettingsUpdate
from app.models.talent import Talent, TalentCreate, TalentUpdate
from app.models.user import User, UserRegister


class TalentRepository(ABC):
    """CRUD, filtered paging and adjacency navigation over talents.

    Ordering is always ascending by the surrogate ``id``.
    """

    @abstractmethod
    def list_talents(
        self,
        page: int,
        limit: int,
        keyword: str | None = None,
        email_only: bool = False,
    ) -> tuple[list[Talent], int]:
        """Return one page of matching talents and the total match count."""

    @abstractmethod
    def get_by_id(self, talent_pk: int) -> Talent:
        """Return the talent with surrogate id *talent_pk* or raise ``NotFoundError``."""

    @abstractmethod
    def get_by_talent_id(self, talent_id: str) -> Talent:
        """Return the talent with external id *talent_id* or raise ``NotFoundError``."""

    @abstractmethod
    def create(self, payload: TalentCreate) -> Talent:
        """Insert a talent; raise ``ConflictError`` if ``talent_id`` is taken."""

    @abstractmethod
    def update(self, talent_pk: int, payload: TalentUpdate) -> Talent:
        """Apply the supplied fields of *payload*; raise ``NotFoundError`` if absent."""

    @abstractmethod
    def delete(self, talent_pk: int) -> bool:
        """Remove a talent.  Returns False when nothing was stored under *talent_pk*."""

    @abstractmethod
    def get_previous(self, talent_pk: int) -> Talent | None:
        """Return the talent immediately before *talent_pk* in id order."""

    @abstractmethod
    def get_next(self, talent_pk: int) -> Talent | None:
        """Return the talent immediately after *talent_pk* in id order."""


class SettingsStore(ABC):
    """Holder of the single outbound-email settings record."""

    @abstractmethod
    def get(self) -> EmailSettings | None:
        """Return the settings, or None before the first ``replace``."""

    @abstractmethod
    def replace(self, payload: EmailSettingsUpdate) -> EmailSettings:
        """Overwrite every field with *payload*, creating the record if needed."""


class UserStore(ABC):
    """Registered users, keyed by id and unique by email."""

    @abstractmethod
    def get_by_id(self, user_id: UUID) -> User | None: ...

    @abstractmethod
    def get_by_email(self, email: str) -> User | None: ...

    @abstractmethod
    def create(self, payload: UserRegister, password_hash: str) -> User:
        """Insert a user; raise ``ConflictError`` if the email is taken."""


# ---------------------------------------------------------------------------
# Helpers shared by backends
# ---------------------------------------------------------------------------

def check_paging(page: int, limit: int) -> int:
    """Validate 1-indexed paging arguments and return the row offset."""
    if page < 1 or limit < 1:
        raise InvalidDataError(f"page and limit must be positive (page={page}, limit={limit})")
    return (page - 1) * limit


def normalize_keyword(keyword: str | None) -> str | None:
    """Map an empty keyword to None (no filter); anything else is used verbatim."""
    return keyword or None


def talent_matches(talent: Talent, keyword: str | None, email_only: bool) -> bool:
    """Return True when *talent* passes the keyword and email filters.

    The keyword is a case-insensitive substring test against the full name,
    email, note and every external link URL.  Case folding is plain
    ``lower()`` so results agree with the SQL ``talent_matches`` function.
    """
    if email_only and not talent.email:
        return False
    if not keyword:
        return True

    needle = keyword.lower()
    haystacks = [talent.full_name, talent.email, talent.note]
    haystacks.extend(link.url for link in talent.external_links)
    return any(text and needle in text.lower() for text in haystacks)
