"""Authentication endpoints.

POST /register and /login set an httpOnly session cookie; /logout revokes
it.  GET /auth/user returns the user behind the current session.

Register and login are plain ``def`` handlers: bcrypt is CPU-bound and
FastAPI runs sync handlers in its threadpool.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from app.core.config import settings
from app.dependencies import get_session_store, get_user_store, require_user
from app.models.user import AuthResponse, User, UserLogin, UserPublic, UserRegister
from app.repositories.base import UserStore
from app.services.auth import authenticate, register_user
from app.services.sessions import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter()


def _start_session(
    request: Request,
    response: Response,
    sessions: SessionStore,
    user: User,
) -> None:
    """Replace any existing session with a fresh one for *user*."""
    sessions.revoke(request.cookies.get(settings.SESSION_COOKIE_NAME))
    token = sessions.issue(user.id)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_TTL_SECONDS,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


@router.post("/register", status_code=201, response_model=AuthResponse)
def register(
    payload: UserRegister,
    request: Request,
    response: Response,
    users: UserStore = Depends(get_user_store),
    sessions: SessionStore = Depends(get_session_store),
) -> AuthResponse:
    """Create an account and log it in.  409 if the email is already registered."""
    user = register_user(users, payload)
    _start_session(request, response, sessions, user)
    return AuthResponse(user=user.public(), message="Registration successful")


@router.post("/login", response_model=AuthResponse)
def login(
    payload: UserLogin,
    request: Request,
    response: Response,
    users: UserStore = Depends(get_user_store),
    sessions: SessionStore = Depends(get_session_store),
) -> AuthResponse:
    """Verify credentials and start a session.  401 on mismatch."""
    user = authenticate(users, payload)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    _start_session(request, response, sessions, user)
    return AuthResponse(user=user.public(), message="Login successful")


@router.post("/logout")
async def logout(
    request: Request,
    response: Response,
    sessions: SessionStore = Depends(get_session_store),
) -> dict[str, str]:
    sessions.revoke(request.cookies.get(settings.SESSION_COOKIE_NAME))
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Logout successful"}


@router.get("/auth/user", response_model=UserPublic)
async def current_user(user: User = Depends(require_user)) -> UserPublic:
    return user.public()
