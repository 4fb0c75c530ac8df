from __future__ import annotations

from typing import Any, Dict, List

from ..config import DEFAULT_WORLD_DB_NAME
from .base import BaseRepository

LISTING_PAGE_SIZE = 50
SEARCH_RESULT_LIMIT = 100

_LIKE_ESCAPE = "!"

_LISTING_COLUMNS = """
    ah.id AS id,
    ah.houseid AS house_id,
    ah.itemguid AS item_guid,
    ah.itemowner AS item_owner,
    ah.buyoutprice AS buyout_price,
    ah.time AS time,
    ah.buyguid AS buy_guid,
    ah.lastbid AS last_bid,
    ah.startbid AS start_bid,
    ah.deposit AS deposit,
    COALESCE(ii.itemEntry, 0) AS item_entry,
    COALESCE(ii.count, 0) AS count,
    COALESCE(c.name, 'Unknown') AS owner_name,
    COALESCE(it.name, 'Unknown Item') AS item_name,
    COALESCE(it.Quality, 0) AS quality,
    COALESCE(it.ItemLevel, 0) AS item_level
"""


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so ``term`` matches literally."""

    return (
        term.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


class AuctionRepository(BaseRepository):
    """Read-only queries over the AzerothCore ``auctionhouse`` table.

    Item templates live in the world database, which is addressed by schema
    qualifier. ``now`` is always supplied by the caller as epoch seconds so
    every query in a request shares one liveness instant.
    """

    def __init__(self, conn, world_db: str = DEFAULT_WORLD_DB_NAME) -> None:
        super().__init__(conn)
        self.world_db = world_db

    def _listing_sql(self, where: str, tail: str) -> str:
        return f"""
            SELECT {_LISTING_COLUMNS}
            FROM auctionhouse ah
            LEFT JOIN item_instance ii ON ah.itemguid = ii.guid
            LEFT JOIN characters c ON ah.itemowner = c.guid
            LEFT JOIN {self.world_db}.item_template it ON ii.itemEntry = it.entry
            WHERE ah.time > :now
            {where}
            ORDER BY ah.time ASC
            {tail}
        """

    def list_live(
        self, now: int, *, limit: int = LISTING_PAGE_SIZE, offset: int = 0
    ) -> List[Dict[str, Any]]:
        """Live listings, soonest-expiring first."""
        sql = self._listing_sql("", "LIMIT :limit OFFSET :offset")
        return self._fetch_all_as_dicts(
            sql, {"now": now, "limit": limit, "offset": offset}
        )

    def search_live(
        self, term: str, now: int, *, limit: int = SEARCH_RESULT_LIMIT
    ) -> List[Dict[str, Any]]:
        """Live listings whose item or owner name contains ``term``."""
        sql = self._listing_sql(
            f"""
            AND (
                LOWER(it.name) LIKE :pattern ESCAPE '{_LIKE_ESCAPE}'
                OR LOWER(c.name) LIKE :pattern ESCAPE '{_LIKE_ESCAPE}'
            )
            """,
            "LIMIT :limit",
        )
        pattern = f"%{escape_like(term.lower())}%"
        return self._fetch_all_as_dicts(
            sql, {"now": now, "pattern": pattern, "limit": limit}
        )

    def stats(self, now: int) -> Dict[str, Any]:
        row = self._fetch_one_as_dict(
            """
            SELECT
                COUNT(*) AS total_items,
                COALESCE(SUM(ah.buyoutprice), 0) AS total_value,
                COUNT(DISTINCT ah.itemowner) AS unique_owners,
                COUNT(DISTINCT ii.itemEntry) AS unique_items
            FROM auctionhouse ah
            LEFT JOIN item_instance ii ON ah.itemguid = ii.guid
            WHERE ah.time > :now
            """,
            {"now": now},
        )
        return row or {}

    def count_active_bids(self, now: int) -> int:
        count = self._fetch_scalar(
            "SELECT COUNT(*) FROM auctionhouse WHERE lastbid > 0 AND time > :now",
            {"now": now},
        )
        return int(count or 0)

    def sellers(self, now: int) -> List[Dict[str, Any]]:
        """Per-owner rollup of live listings, busiest sellers first."""
        return self._fetch_all_as_dicts(
            """
            SELECT
                c.name AS seller_name,
                COUNT(ah.id) AS total_auctions,
                COALESCE(SUM(ah.buyoutprice), 0) AS total_value,
                COUNT(DISTINCT ii.itemEntry) AS unique_items
            FROM auctionhouse ah
            LEFT JOIN characters c ON ah.itemowner = c.guid
            LEFT JOIN item_instance ii ON ah.itemguid = ii.guid
            WHERE ah.time > :now
              AND c.name IS NOT NULL
            GROUP BY ah.itemowner, c.name
            ORDER BY total_auctions DESC, total_value DESC
            """,
            {"now": now},
        )
