"""Process configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None


def _parse_origins(raw: str | None) -> tuple[str, ...]:
    if raw is None or raw.strip() == "":
        return ("*",)
    origins = tuple(o.strip() for o in raw.split(",") if o.strip())
    return origins or ("*",)


@dataclass(frozen=True)
class Settings:
    """Runtime settings.

    Attributes:
        database_url: libpq DSN or postgres:// URL (DATABASE_URL).
        db_pool_min: Minimum pooled connections (DB_POOL_MIN).
        db_pool_max: Maximum pooled connections (DB_POOL_MAX).
        allowed_origins: CORS allow-list (ALLOWED_ORIGINS, comma separated).
                         Defaults to any origin.
        seed_facilities: Seed the default facility catalog at startup
                         (SEED_FACILITIES).
    """

    database_url: str = ""
    db_pool_min: int = 1
    db_pool_max: int = 10
    allowed_origins: tuple[str, ...] = field(default=("*",))
    seed_facilities: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        pool_min = _env_int("DB_POOL_MIN", 1)
        pool_max = _env_int("DB_POOL_MAX", 10)
        if pool_min < 1 or pool_max < pool_min:
            raise RuntimeError(
                f"Invalid pool bounds: DB_POOL_MIN={pool_min} DB_POOL_MAX={pool_max}"
            )
        return cls(
            database_url=os.environ.get("DATABASE_URL", ""),
            db_pool_min=pool_min,
            db_pool_max=pool_max,
            allowed_origins=_parse_origins(os.environ.get("ALLOWED_ORIGINS")),
            seed_facilities=_env_bool("SEED_FACILITIES", True),
        )
