"""Enum types shared across configuration and storage."""

from enum import Enum


class StorageBackend(str, Enum):
    """Where talents, settings and users are persisted."""
    memory = "memory"
    supabase = "supabase"
