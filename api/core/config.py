"""
Process-wide settings.

`load_settings()` reads the environment once at startup and returns an
immutable `Settings`. The result is stored on `app.state.settings` and passed
explicitly to anything that needs it (token signing, DB pool, CORS).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from dotenv import load_dotenv

DEFAULT_ALLOWED_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


class ConfigError(RuntimeError):
    pass


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def sanitize_database_url(url: str) -> str:
    # asyncpg rejects libpq's `sslmode` query parameter.
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


@dataclass(frozen=True)
class Settings:
    database_url: str
    jwt_secret: str = field(repr=False)
    jwt_algorithm: str = "HS256"
    token_ttl_days: int = 90
    bcrypt_rounds: int = 12
    allowed_origins: tuple[str, ...] = DEFAULT_ALLOWED_ORIGINS
    db_pool_min: int = 1
    db_pool_max: int = 5
    db_command_timeout_s: float = 30.0
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.jwt_secret:
            raise ConfigError("JWT_SECRET is not set.")
        if not self.database_url:
            raise ConfigError("DATABASE_URL is not set.")
        if self.token_ttl_days <= 0:
            raise ConfigError("TOKEN_TTL_DAYS must be positive.")
        # bcrypt accepts cost factors 4..31.
        if not 4 <= self.bcrypt_rounds <= 31:
            raise ConfigError("BCRYPT_ROUNDS must be between 4 and 31.")
        if self.db_pool_min < 1 or self.db_pool_max < self.db_pool_min:
            raise ConfigError("DB_POOL_MIN/DB_POOL_MAX are inconsistent.")


def load_settings() -> Settings:
    """
    Build settings from the environment (and `.env`, if present).

    Raises ConfigError when a required value is missing. There is
    deliberately no fallback signing secret.
    """
    load_dotenv(override=False)

    return Settings(
        database_url=sanitize_database_url(_env_str("DATABASE_URL")),
        jwt_secret=_env_str("JWT_SECRET"),
        jwt_algorithm=_env_str("JWT_ALG", "HS256"),
        token_ttl_days=_env_int("TOKEN_TTL_DAYS", 90),
        bcrypt_rounds=_env_int("BCRYPT_ROUNDS", 12),
        allowed_origins=_env_list("ALLOWED_ORIGINS", DEFAULT_ALLOWED_ORIGINS),
        db_pool_min=_env_int("DB_POOL_MIN", 1),
        db_pool_max=_env_int("DB_POOL_MAX", 5),
        db_command_timeout_s=_env_float("DB_COMMAND_TIMEOUT_S", 30.0),
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
    )
