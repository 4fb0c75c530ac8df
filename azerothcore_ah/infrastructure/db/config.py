from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping

from sqlalchemy.engine import URL

DEFAULT_DB_HOST = "localhost"
DEFAULT_DB_PORT = 3306
DEFAULT_DB_USER = "root"
DEFAULT_DB_PASSWORD = ""
DEFAULT_DB_NAME = "acore_characters"
DEFAULT_WORLD_DB_NAME = "acore_world"
DEFAULT_POOL_SIZE = 25
DEFAULT_POOL_RECYCLE_SECONDS = 300

_IDENTIFIER_RE = re.compile(r"^[A-Za-z0-9_]+$")


class ConfigurationError(ValueError):
    """Raised when an environment variable holds an unusable value."""


def env_value(env: Mapping[str, str], key: str, default: str) -> str:
    """Return ``env[key]``, treating unset and empty values alike."""

    value = env.get(key)
    if value is None or value == "":
        return default
    return value


def env_int(
    env: Mapping[str, str], key: str, default: int, *, minimum: int | None = None
) -> int:
    raw = env_value(env, key, str(default))
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from exc
    if minimum is not None and value < minimum:
        raise ConfigurationError(f"{key} must be >= {minimum}, got {value}")
    return value


def _identifier(env: Mapping[str, str], key: str, default: str) -> str:
    value = env_value(env, key, default)
    if not _IDENTIFIER_RE.match(value):
        raise ConfigurationError(
            f"{key} must contain only letters, digits and underscores, got {value!r}"
        )
    return value


@dataclass(frozen=True)
class DatabaseConfig:
    """Connection and pool settings for the characters database."""

    host: str = DEFAULT_DB_HOST
    port: int = DEFAULT_DB_PORT
    user: str = DEFAULT_DB_USER
    password: str = DEFAULT_DB_PASSWORD
    name: str = DEFAULT_DB_NAME
    world_name: str = DEFAULT_WORLD_DB_NAME
    pool_size: int = DEFAULT_POOL_SIZE
    pool_recycle_seconds: int = DEFAULT_POOL_RECYCLE_SECONDS

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> "DatabaseConfig":
        """Read ``DB_*`` and ``WORLD_DB_NAME`` variables from ``env``."""

        return cls(
            host=env_value(env, "DB_HOST", DEFAULT_DB_HOST),
            port=env_int(env, "DB_PORT", DEFAULT_DB_PORT, minimum=1),
            user=env_value(env, "DB_USER", DEFAULT_DB_USER),
            password=env_value(env, "DB_PASSWORD", DEFAULT_DB_PASSWORD),
            name=_identifier(env, "DB_NAME", DEFAULT_DB_NAME),
            world_name=_identifier(env, "WORLD_DB_NAME", DEFAULT_WORLD_DB_NAME),
            pool_size=env_int(env, "DB_POOL_SIZE", DEFAULT_POOL_SIZE, minimum=1),
            pool_recycle_seconds=env_int(
                env, "DB_POOL_RECYCLE", DEFAULT_POOL_RECYCLE_SECONDS, minimum=1
            ),
        )

    def url(self) -> URL:
        """SQLAlchemy URL for the PyMySQL driver."""

        return URL.create(
            "mysql+pymysql",
            username=self.user,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=self.name,
            query={"charset": "utf8mb4"},
        )

    def describe(self) -> str:
        """Connection target without credentials, for log messages."""

        return f"{self.user}@{self.host}:{self.port}/{self.name}"
