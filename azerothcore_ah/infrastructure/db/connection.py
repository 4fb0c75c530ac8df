from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from ..observability import get_logger
from .config import DatabaseConfig

logger = get_logger(__name__)


class DatabaseError(Exception):
    """Custom exception for database connection errors."""


def create_db_engine(config: DatabaseConfig, *, echo: bool = False) -> Engine:
    """Create the pooled engine for the characters database.

    The pool never opens more than ``config.pool_size`` connections, keeps
    idle ones for reuse and replaces any connection older than
    ``config.pool_recycle_seconds``.
    """

    logger.debug(
        "Creating engine for %s (pool_size=%d, recycle=%ds)",
        config.describe(),
        config.pool_size,
        config.pool_recycle_seconds,
    )
    return create_engine(
        config.url(),
        echo=echo,
        pool_size=config.pool_size,
        max_overflow=0,
        pool_recycle=config.pool_recycle_seconds,
        pool_pre_ping=True,
    )


def check_connection(engine: Engine) -> None:
    """Run a trivial query so startup fails fast on an unreachable database."""

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        raise DatabaseError(f"Failed to connect to database: {exc}") from exc


@contextmanager
def get_connection(engine: Engine) -> Iterator[Connection]:
    """Yield a pooled connection; it goes back to the pool on exit."""

    with engine.connect() as conn:
        yield conn
