"""Email settings endpoints (SMTP credentials and templates).

POST replaces the whole record: fields missing from the body are cleared.
Clients wanting a partial edit GET first and send back the merged object.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from app.dependencies import get_settings_store, require_user
from app.models.email_settings import EmailSettings, EmailSettingsUpdate
from app.models.user import User
from app.repositories.base import SettingsStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def read_settings(
    settings_store: SettingsStore = Depends(get_settings_store),
    _user: User = Depends(require_user),
) -> dict[str, Any]:
    """Return the stored settings, or ``{}`` before the first save."""
    stored = settings_store.get()
    if stored is None:
        return {}
    return stored.model_dump(mode="json", by_alias=True)


@router.post("", response_model=EmailSettings)
async def replace_settings(
    payload: EmailSettingsUpdate,
    settings_store: SettingsStore = Depends(get_settings_store),
    user: User = Depends(require_user),
) -> EmailSettings:
    stored = settings_store.replace(payload)
    logger.info("settings_saved", extra={"user_id": str(user.id)})
    return stored
