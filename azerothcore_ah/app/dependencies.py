"""Shared FastAPI dependencies for the auction house API.

The engine and clock live on ``app.state``; every request checks out its own
pooled connection and gets a repository and service bound to it.
"""

from __future__ import annotations

from typing import Annotated, Iterator

from fastapi import Depends, Request
from sqlalchemy.engine import Connection, Engine

from azerothcore_ah.app.config import Settings
from azerothcore_ah.infrastructure.db import get_connection
from azerothcore_ah.infrastructure.db.repositories import AuctionRepository
from azerothcore_ah.services.auctions import AuctionViewService, Clock

__all__ = [
    "get_settings",
    "get_engine",
    "get_db_connection",
    "get_auction_repository",
    "get_auction_view_service",
    "AuctionRepository",
    "AuctionRepositoryDep",
    "AuctionViewServiceDep",
]


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_engine(request: Request) -> Engine:
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise RuntimeError("Database engine not initialized. Server not started?")
    return engine


def get_clock(request: Request) -> Clock:
    return request.app.state.clock


def get_db_connection(
    engine: Engine = Depends(get_engine),
) -> Iterator[Connection]:
    """Provide a pooled connection for the duration of one request."""

    with get_connection(engine) as conn:
        yield conn


def get_auction_repository(
    conn: Connection = Depends(get_db_connection),
    settings: Settings = Depends(get_settings),
) -> AuctionRepository:
    return AuctionRepository(conn, world_db=settings.database.world_name)


AuctionRepositoryDep = Annotated[AuctionRepository, Depends(get_auction_repository)]


def get_auction_view_service(
    repository: AuctionRepositoryDep,
    clock: Clock = Depends(get_clock),
) -> AuctionViewService:
    return AuctionViewService(repository, clock=clock)


AuctionViewServiceDep = Annotated[AuctionViewService, Depends(get_auction_view_service)]
