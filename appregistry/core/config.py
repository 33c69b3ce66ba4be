"""
Configuration helpers for the App Registry backend.

Routers, services and storage adapters read their settings from here instead
of touching os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

DEFAULT_DATA_FILE = Path(__file__).resolve().parents[2] / "data" / "apps.json"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    data_file: Path
    storage_backend: str
    database_url: str
    cors_origins: tuple[str, ...]
    log_level: str
    host: str
    port: int
    service_version: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _list(value: str | None) -> tuple[str, ...]:
        return tuple(item.strip() for item in (value or "").split(",") if item.strip())

    app_env = (os.getenv("APP_ENV") or "dev").lower()
    cors_origins = _list(os.getenv("CORS_ORIGINS"))
    if not cors_origins and app_env != "prod":
        cors_origins = ("*",)

    return Settings(
        app_env=app_env,
        data_file=Path(os.getenv("DATA_FILE") or DEFAULT_DATA_FILE),
        storage_backend=(os.getenv("STORAGE_BACKEND") or "json").strip().lower(),
        database_url=os.getenv("DATABASE_URL", ""),
        cors_origins=cors_origins,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT", "3000"), 3000),
        service_version=os.getenv("SERVICE_VERSION", "1.0.0"),
    )
