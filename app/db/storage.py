"""Storage assembly.

``build_storage()`` creates one set of repositories for the configured
backend.  The application builds it once per lifespan and keeps it on
``app.state``; tests build fresh in-memory instances.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from app.core.config import settings
from app.db.supabase import get_supabase
from app.models.enums import StorageBackend
from app.repositories.base import SettingsStore, TalentRepository, UserStore
from app.repositories.memory import (
    InMemorySettingsStore,
    InMemoryTalentRepository,
    InMemoryUserStore,
)
from app.repositories.supabase import (
    SupabaseSettingsStore,
    SupabaseTalentRepository,
    SupabaseUserStore,
)

logger = logging.getLogger(__name__)


@dataclass
class Storage:
    """The three repositories the API layer depends on."""
    backend: StorageBackend
    talents: TalentRepository
    settings: SettingsStore
    users: UserStore


def build_memory_storage() -> Storage:
    return Storage(
        backend=StorageBackend.memory,
        talents=InMemoryTalentRepository(),
        settings=InMemorySettingsStore(),
        users=InMemoryUserStore(),
    )


def build_storage(backend: StorageBackend | None = None) -> Storage:
    """Build repositories for *backend* (defaults to ``settings.STORAGE_BACKEND``)."""
    backend = backend or settings.STORAGE_BACKEND

    if backend == StorageBackend.supabase:
        client = get_supabase()
        storage = Storage(
            backend=backend,
            talents=SupabaseTalentRepository(client),
            settings=SupabaseSettingsStore(client),
            users=SupabaseUserStore(client),
        )
    else:
        storage = build_memory_storage()

    logger.info("storage_ready", extra={"backend": backend.value})
    return storage
