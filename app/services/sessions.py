"""Server-side session store.

Maps opaque cookie tokens to user ids with a fixed time-to-live.  Expired
entries are dropped lazily on lookup and in bulk by the ``prune_sessions``
scheduler job.
"""

from __future__ import annotations

import logging
import secrets
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from uuid import UUID

logger = logging.getLogger(__name__)


@dataclass
class _Session:
    user_id: UUID
    expires_at: float


class SessionStore:
    """Thread-safe in-memory session table."""

    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._sessions: dict[str, _Session] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def issue(self, user_id: UUID) -> str:
        """Start a session for *user_id* and return its token."""
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._sessions[token] = _Session(user_id, self._clock() + self._ttl)
        return token

    def validate(self, token: str | None) -> UUID | None:
        """Return the user id bound to *token*, or None if unknown or expired."""
        if not token:
            return None
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None
            if session.expires_at <= self._clock():
                del self._sessions[token]
                return None
            return session.user_id

    def revoke(self, token: str | None) -> None:
        if not token:
            return
        with self._lock:
            self._sessions.pop(token, None)

    def prune_expired(self) -> int:
        """Drop every expired session.  Returns how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [t for t, s in self._sessions.items() if s.expires_at <= now]
            for token in expired:
                del self._sessions[token]
        if expired:
            logger.info("sessions_pruned", extra={"count": len(expired)})
        return len(expired)
