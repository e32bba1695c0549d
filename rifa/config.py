"""Environment-based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from sqlalchemy.engine import URL


def resolve_database_url() -> str:
    """Resolve DB connection string.

    Priority:
      1) DATABASE_URL (explicit)
      2) Build from PG* env vars (common Postgres convention)
      3) Fallback to local sqlite
    """

    explicit = os.getenv("DATABASE_URL")
    if explicit:
        return explicit

    host = os.getenv("PGHOST")
    user = os.getenv("PGUSER")
    database = os.getenv("PGDATABASE")
    port_raw = os.getenv("PGPORT")

    if host and user and database:
        sslmode = os.getenv("PGSSLMODE", "require")
        try:
            port = int(port_raw) if port_raw else 5432
        except ValueError:
            port = 5432

        url = URL.create(
            drivername="postgresql+psycopg2",
            username=user,
            password=os.getenv("PGPASSWORD"),
            host=host,
            port=port,
            database=database,
            query={"sslmode": sslmode} if sslmode else {},
        )
        return url.render_as_string(hide_password=False)

    return "sqlite:///./rifa.db"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        return None


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret")
    DATABASE_URL: str = resolve_database_url()
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Draw animation timings (milliseconds)
    DRAW_SPIN_DURATION_MS: int = _env_int("DRAW_SPIN_DURATION_MS", 4000)
    DRAW_REVEAL_DELAY_MS: int = _env_int("DRAW_REVEAL_DELAY_MS", 1200)
    DRAW_TICK_BASE_MS: int = _env_int("DRAW_TICK_BASE_MS", 50)
    DRAW_TICK_MAX_MS: int = _env_int("DRAW_TICK_MAX_MS", 850)
    DRAW_RANDOM_SEED: int | None = _env_optional_int("DRAW_RANDOM_SEED")

    TICKETS_PER_PAGE: int = _env_int("TICKETS_PER_PAGE", 25)
    MAX_TICKETS_PER_EVENT: int = _env_int("MAX_TICKETS_PER_EVENT", 100_000)


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    """Development configuration."""

    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG: bool = False


@dataclass(frozen=True)
class TestingConfig(BaseConfig):
    """Test configuration: throwaway sqlite, instant draws."""

    TESTING: bool = True
    DEBUG: bool = False
    DATABASE_URL: str = "sqlite:///:memory:"
    DRAW_SPIN_DURATION_MS: int = 0
    DRAW_REVEAL_DELAY_MS: int = 0


def get_config() -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV."""

    env = os.getenv("APP_ENV", "development").lower().strip()
    if env == "production":
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
