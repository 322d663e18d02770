"""
Configuration helpers for the Pokedeck backend.

Routers and services read the Settings object exposed here instead of
fetching os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

TOKEN_TTL_DEFAULT = 7 * 24 * 60 * 60


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    jwt_secret: str
    log_level: str
    cors_origins: tuple[str, ...]


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _list(value: str | None) -> tuple[str, ...]:
        return tuple(item.strip() for item in (value or "").split(",") if item.strip())

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=os.getenv("DATABASE_URL", "sqlite:///pokedeck.db").strip(),
        jwt_secret=os.getenv("JWT_SECRET", ""),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        cors_origins=_list(os.getenv("CORS_ORIGINS")),
    )
