"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. SECRET_KEY) are validated at
load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# bcrypt accepts log2 cost factors in this range.
_BCRYPT_MIN_ROUNDS = 4
_BCRYPT_MAX_ROUNDS = 31


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required (secret_key, bcrypt_rounds range).
    """

    # App
    app_name: str = "accounts"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (PostgreSQL via asyncpg; schema managed by Alembic)
    database_url: str = ""
    database_echo: bool = False
    # Optional pool overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # Session tokens
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # Password hashing and reset
    bcrypt_rounds: int = 10
    password_reset_token_expire_minutes: int = 60

    # Frontend: reset links and post-OAuth redirects point here.
    frontend_url: str = "http://localhost:3001"

    # Google OAuth (login is disabled while client id/secret are unset)
    google_client_id: str | None = None
    google_client_secret: SecretStr | None = None
    google_redirect_uri: str = "http://localhost:8000/api/v1/auth/google/callback"

    # CORS
    allowed_origins: str = "http://localhost:3001"

    # Request
    request_id_header: str = "X-Request-ID"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required secrets and tunables."""
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if not _BCRYPT_MIN_ROUNDS <= self.bcrypt_rounds <= _BCRYPT_MAX_ROUNDS:
            raise ValueError(
                f"BCRYPT_ROUNDS must be between {_BCRYPT_MIN_ROUNDS} and "
                f"{_BCRYPT_MAX_ROUNDS}, got: {self.bcrypt_rounds}"
            )
        if self.access_token_expire_minutes <= 0:
            raise ValueError("ACCESS_TOKEN_EXPIRE_MINUTES must be positive")
        if self.password_reset_token_expire_minutes <= 0:
            raise ValueError("PASSWORD_RESET_TOKEN_EXPIRE_MINUTES must be positive")
        return self

    @property
    def google_oauth_enabled(self) -> bool:
        """True when both Google client id and secret are configured."""
        return bool(
            self.google_client_id
            and self.google_client_secret
            and self.google_client_secret.get_secret_value()
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
