"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Placeholder values shipped in .env.example and docs; never valid for signing
INSECURE_SECRET_KEYS = frozenset(
    {
        "change-me-in-production",
        "default_jwt_secret_change_me",
        "fallback_secret_dev_only",
        "secret",
        "password",
        "changeme",
    }
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App settings
    app_name: str = "Movie Explorer API"
    debug: bool = False
    log_level: str = "INFO"
    secret_key: str  # Required, no default
    frontend_url: str = "http://localhost:3000"

    # Database
    database_url: str = "sqlite+aiosqlite:///./data/movie_explorer.db"

    # OMDB API
    omdb_api_key: str = ""
    omdb_base_url: str = "http://www.omdbapi.com"

    # Redis cache (disabled when unset)
    redis_url: str | None = None
    search_cache_ttl: int = 60 * 10
    details_cache_ttl: int = 60 * 60 * 24

    # JWT Authentication
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60 * 24 * 7

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str, info) -> str:
        """Validate that secret_key is set and not a documented placeholder."""
        if not v:
            raise ValueError("SECRET_KEY is required")

        if v in INSECURE_SECRET_KEYS:
            raise ValueError("SECRET_KEY must not be a default or common weak value")

        # In production mode, ensure secret key is strong
        debug = info.data.get("debug", False)
        if not debug and len(v) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters in production mode")

        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the log level so 'debug' and 'DEBUG' both work."""
        return v.upper()

    @property
    def cache_enabled(self) -> bool:
        """Whether a Redis URL has been configured."""
        return bool(self.redis_url)

    def validate_runtime_config(self) -> list[str]:
        """Validate runtime configuration and return warnings."""
        warnings = []

        # Check OMDB API key
        if not self.omdb_api_key:
            warnings.append("OMDB_API_KEY is not set - media search will not work")

        if not self.cache_enabled:
            warnings.append("REDIS_URL is not set - media lookups will not be cached")

        # Warn about debug mode in production
        if self.debug:
            warnings.append("DEBUG mode is enabled - should be disabled in production")

        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
