"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Cross-field rules (cache mode, poll/wait bounds) are
validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from permgraph.core.constants import DEFAULT_PERMISSION_CACHE_TTL, INVALIDATION_CHANNEL

PERMISSION_CACHE_MODES = ("sync", "async")


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have defaults. database_url is only required once a
    request actually needs the SQL edge store (see persistence.database).
    """

    # App
    app_name: str = "permgraph"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (edge store and principal directory)
    database_url: str = ""
    database_echo: bool = False
    # Optional pool/driver overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Redis (cache store and invalidation channel)
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None

    # Permission cache
    # "sync": recompute inline on miss, invalidate by deleting keys.
    # "async": broadcast invalidation, background worker repopulates, get() polls.
    permission_cache_mode: str = "sync"
    permission_cache_ttl: int = DEFAULT_PERMISSION_CACHE_TTL
    permission_cache_key_version: str = "v1"
    permission_poll_interval: float = 0.1
    permission_wait_timeout: float = 30.0
    permission_refresh_interval: float = 3600.0
    invalidation_channel: str = INVALIDATION_CHANNEL
    # Group every principal can read through (appended to read-capable groups)
    anonymous_group_id: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_permission_cache(self) -> "Settings":
        """Validate permission cache mode and timing bounds.

        - Mode must be 'sync' or 'async'; async needs Redis for the channel.
        - Poll interval, wait timeout, TTL, and refresh interval are positive.
        - Wait timeout must allow at least one poll.
        """
        if self.permission_cache_mode not in PERMISSION_CACHE_MODES:
            raise ValueError(
                f"permission_cache_mode must be 'sync' or 'async', got: {self.permission_cache_mode!r}"
            )
        if self.permission_cache_mode == "async" and not self.redis_enabled:
            raise ValueError(
                "permission_cache_mode 'async' requires REDIS_ENABLED=true "
                "(invalidation is broadcast over Redis pub/sub)."
            )
        if self.permission_cache_ttl <= 0:
            raise ValueError("permission_cache_ttl must be positive")
        if self.permission_poll_interval <= 0:
            raise ValueError("permission_poll_interval must be positive")
        if self.permission_wait_timeout < self.permission_poll_interval:
            raise ValueError(
                "permission_wait_timeout must be >= permission_poll_interval"
            )
        if self.permission_refresh_interval <= 0:
            raise ValueError("permission_refresh_interval must be positive")
        return self


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
