"""Shared helpers for composing CLI command contexts.

This module centralises CLI wiring: loading settings, building the pooled
engine and handing out services bound to a managed connection.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from sqlalchemy.engine import Connection, Engine

from azerothcore_ah.app.config import Settings, load_settings
from azerothcore_ah.infrastructure.db import create_db_engine, get_connection
from azerothcore_ah.infrastructure.db.repositories import AuctionRepository
from azerothcore_ah.services.auctions import AuctionViewService, Clock


@dataclass(frozen=True)
class CLIContext:
    """Container for CLI dependencies and configuration."""

    settings: Settings
    engine: Engine
    clock: Clock = time.time

    @contextmanager
    def connect(self) -> Iterator[Connection]:
        with get_connection(self.engine) as connection:
            yield connection

    @contextmanager
    def auction_view_service(self) -> Iterator[AuctionViewService]:
        """Yield an AuctionViewService wired to a managed connection."""

        with self.connect() as connection:
            repository = AuctionRepository(
                connection, world_db=self.settings.database.world_name
            )
            yield AuctionViewService(repository, clock=self.clock)


def build_cli_context(env_file: str | Path | None = None) -> CLIContext:
    """Load settings and build the pooled engine. No connection is opened yet."""

    settings = load_settings(env_file)
    return CLIContext(settings=settings, engine=create_db_engine(settings.database))
