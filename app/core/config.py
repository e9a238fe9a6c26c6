"""Application configuration via pydantic-settings.

Loads all settings from environment variables with sensible defaults.
A global `settings` singleton is available for import throughout the app.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from app.models.enums import StorageBackend


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Storage
    STORAGE_BACKEND: StorageBackend = StorageBackend.memory
    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""
    SEED_SAMPLE_DATA: bool = True

    # CORS
    ALLOWED_ORIGINS: str = "*"

    # Sessions
    SESSION_COOKIE_NAME: str = "sid"
    SESSION_TTL_SECONDS: int = 7 * 24 * 60 * 60
    SESSION_COOKIE_SECURE: bool = False
    SESSION_PRUNE_INTERVAL_MINUTES: int = 60

    # Passwords
    BCRYPT_ROUNDS: int = 10

    # Outbound email
    SMTP_TIMEOUT_SECONDS: float = 30.0

    # Logging
    LOG_LEVEL: str = "INFO"


settings = Settings()
