"""Talent endpoints.

Listing and every mutation require a session.  Single-record reads and
navigation stay public so profile pages can be shared.

All routes address a talent by its internal integer ``id``, except the
``/by-talent-id/{talent_id}`` lookup.  Domain errors raised by the
repository (not found, conflict, invalid data) are mapped to HTTP codes by
the handlers registered in ``app.main``.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Response

from app.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from app.dependencies import get_settings_store, get_talent_repository, require_user
from app.models.talent import (
    Talent,
    TalentCreate,
    TalentListResponse,
    TalentNavigation,
    TalentUpdate,
)
from app.models.user import User
from app.repositories.base import SettingsStore, TalentRepository
from app.services.notifier import send_talent_email

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

@router.get("", response_model=TalentListResponse)
async def list_talents(
    page: int = Query(default=DEFAULT_PAGE, ge=1, description="1-indexed page"),
    limit: int = Query(
        default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT, description="Page size"
    ),
    keyword: str | None = Query(
        default=None,
        description="Case-insensitive match on name, email, note or link URL",
    ),
    email_only: bool = Query(
        default=False,
        alias="emailOnly",
        description="Only talents with an email address",
    ),
    repository: TalentRepository = Depends(get_talent_repository),
    _user: User = Depends(require_user),
) -> TalentListResponse:
    """Return one page of talents in id order plus the total match count.

    Surrounding whitespace in the query string is dropped; a blank keyword
    disables the filter.
    """
    if keyword is not None:
        keyword = keyword.strip() or None
    talents, total = repository.list_talents(
        page=page, limit=limit, keyword=keyword, email_only=email_only
    )
    return TalentListResponse(talents=talents, total=total)


@router.get("/by-talent-id/{talent_id}", response_model=Talent)
async def get_talent_by_talent_id(
    talent_id: str,
    repository: TalentRepository = Depends(get_talent_repository),
) -> Talent:
    return repository.get_by_talent_id(talent_id)


@router.get("/{talent_pk}", response_model=Talent)
async def get_talent(
    talent_pk: int,
    repository: TalentRepository = Depends(get_talent_repository),
) -> Talent:
    return repository.get_by_id(talent_pk)


@router.get("/{talent_pk}/navigation", response_model=TalentNavigation)
async def get_talent_navigation(
    talent_pk: int,
    repository: TalentRepository = Depends(get_talent_repository),
) -> TalentNavigation:
    """Return the neighbours of a talent in id order (unfiltered).

    404 when the talent itself does not exist.
    """
    repository.get_by_id(talent_pk)
    return TalentNavigation(
        previous=repository.get_previous(talent_pk),
        next=repository.get_next(talent_pk),
    )


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------

@router.post("", status_code=201, response_model=Talent)
async def create_talent(
    payload: TalentCreate,
    repository: TalentRepository = Depends(get_talent_repository),
    _user: User = Depends(require_user),
) -> Talent:
    return repository.create(payload)


@router.patch("/{talent_pk}", response_model=Talent)
async def update_talent(
    talent_pk: int,
    payload: TalentUpdate,
    repository: TalentRepository = Depends(get_talent_repository),
    _user: User = Depends(require_user),
) -> Talent:
    """Apply only the fields present in the body; ``null`` clears a field."""
    return repository.update(talent_pk, payload)


@router.delete("/{talent_pk}", status_code=204, response_class=Response)
async def delete_talent(
    talent_pk: int,
    repository: TalentRepository = Depends(get_talent_repository),
    _user: User = Depends(require_user),
) -> Response:
    """Delete a talent.  Deleting an absent id is not an error."""
    if not repository.delete(talent_pk):
        logger.info("talent_delete_noop", extra={"talent_pk": talent_pk})
    return Response(status_code=204)


@router.post("/{talent_pk}/send-email")
async def send_email(
    talent_pk: int,
    repository: TalentRepository = Depends(get_talent_repository),
    settings_store: SettingsStore = Depends(get_settings_store),
    _user: User = Depends(require_user),
) -> dict[str, str]:
    """Send the configured template email to the talent's address."""
    talent = repository.get_by_id(talent_pk)
    await send_talent_email(talent, settings_store.get())
    return {"message": "Email sent successfully"}
