"""Configuration utilities for the auction house viewer.

Settings come from the process environment, optionally seeded from a
``.env`` file. Unset and empty variables fall back to their defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from azerothcore_ah.infrastructure.db.config import (ConfigurationError,
                                                     DatabaseConfig, env_int,
                                                     env_value)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    """Process-wide settings for the web server and the CLI."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    database: DatabaseConfig = field(default_factory=DatabaseConfig)

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> "Settings":
        return cls(
            host=env_value(env, "HOST", DEFAULT_HOST),
            port=env_int(env, "PORT", DEFAULT_PORT, minimum=1),
            log_level=env_value(env, "LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
            database=DatabaseConfig.from_env(env),
        )


def load_settings(env_file: str | Path | None = None) -> Settings:
    """Load settings from the environment.

    Args:
        env_file: Optional ``.env`` path. When omitted, a ``.env`` in the
            working directory is used if present. Variables already set in
            the environment take precedence over the file.

    Raises:
        ConfigurationError: a variable holds an unusable value.
    """
    if env_file is not None:
        load_dotenv(env_file, override=False)
    else:
        load_dotenv(find_dotenv(usecwd=True), override=False)
    return Settings.from_env(os.environ)


__all__ = ["ConfigurationError", "Settings", "load_settings"]
