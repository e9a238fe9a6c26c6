"""Credential handling: bcrypt password hashing, registration and login.

Session tokens live in ``app.services.sessions``; this module only decides
whether a set of credentials belongs to a user.
"""

from __future__ import annotations

import logging

import bcrypt

from app.core.config import settings
from app.models.user import User, UserLogin, UserRegister
from app.repositories.base import UserStore

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of *password*."""
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check *password* against a stored bcrypt hash.

    A malformed hash counts as a mismatch rather than an error.
    """
    secret = password.encode("utf-8")
    if not password_hash or len(secret) > 72:
        return False
    try:
        return bcrypt.checkpw(secret, password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("password_hash_malformed")
        return False


def register_user(users: UserStore, payload: UserRegister) -> User:
    """Create a user with a hashed password.

    Raises ``ConflictError`` (from the store) if the email is taken.
    """
    user = users.create(payload, hash_password(payload.password))
    logger.info("user_registered", extra={"user_id": str(user.id)})
    return user


def authenticate(users: UserStore, credentials: UserLogin) -> User | None:
    """Return the user matching *credentials*, or None if they are invalid."""
    user = users.get_by_email(credentials.email)
    if user is None or not verify_password(credentials.password, user.password_hash):
        logger.info("login_failed")
        return None
    logger.info("login_succeeded", extra={"user_id": str(user.id)})
    return user
