"""Base repository class with shared database query helpers.

This module provides a base class for repository implementations, keeping
the row→dict conversion in one place.
"""

from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import text
from sqlalchemy.engine import Connection


class BaseRepository:
    """Base class for all repository implementations."""

    def __init__(self, conn: Connection) -> None:
        """Initialize repository with a database connection.

        Args:
            conn: SQLAlchemy connection checked out from the pool
        """
        self.conn = conn

    def _fetch_all_as_dicts(
        self, query: str, params: Mapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """Execute query and return all rows as dictionaries.

        Args:
            query: SQL query string with ``:name`` placeholders
            params: Bound parameters (optional)

        Returns:
            List of dictionaries with column labels as keys

        Example:
            >>> rows = self._fetch_all_as_dicts(
            ...     "SELECT guid, name FROM characters WHERE level > :level",
            ...     {"level": 70},
            ... )
            >>> rows[0]["name"]
            'Thrall'
        """
        result = self.conn.execute(text(query), dict(params or {}))
        return [dict(row) for row in result.mappings()]

    def _fetch_one_as_dict(
        self, query: str, params: Mapping[str, Any] | None = None
    ) -> dict[str, Any] | None:
        """Execute query and return the first row as a dictionary, or None."""
        result = self.conn.execute(text(query), dict(params or {}))
        row = result.mappings().first()
        return dict(row) if row is not None else None

    def _fetch_scalar(
        self, query: str, params: Mapping[str, Any] | None = None
    ) -> Any:
        """Execute query and return first column of first row.

        Example:
            >>> self._fetch_scalar("SELECT COUNT(*) FROM auctionhouse")
            42
        """
        return self.conn.execute(text(query), dict(params or {})).scalar()
