"""FastAPI dependency providers.

Repositories and the session store are built in the application lifespan
and kept on ``app.state``; handlers receive them through these functions,
which tests can replace with ``app.dependency_overrides``.
"""

from fastapi import Depends, HTTPException, Request

from app.core.config import settings
from app.db.storage import Storage
from app.models.user import User
from app.repositories.base import SettingsStore, TalentRepository, UserStore
from app.services.sessions import SessionStore


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_talent_repository(storage: Storage = Depends(get_storage)) -> TalentRepository:
    return storage.talents


def get_settings_store(storage: Storage = Depends(get_storage)) -> SettingsStore:
    return storage.settings


def get_user_store(storage: Storage = Depends(get_storage)) -> UserStore:
    return storage.users


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def require_user(
    request: Request,
    sessions: SessionStore = Depends(get_session_store),
    users: UserStore = Depends(get_user_store),
) -> User:
    """Resolve the session cookie to a user or reject the request with 401."""
    user_id = sessions.validate(request.cookies.get(settings.SESSION_COOKIE_NAME))
    if user_id is not None:
        user = users.get_by_id(user_id)
        if user is not None:
            return user
    raise HTTPException(status_code=401, detail="Unauthorized")
