"""Auction house domain models and display rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400

COPPER_PER_SILVER = 100
COPPER_PER_GOLD = 10000

QUALITY_NAMES: tuple[str, ...] = (
    "Poor",
    "Common",
    "Uncommon",
    "Rare",
    "Epic",
    "Legendary",
)


def format_time_left(seconds: int) -> str:
    """Render a remaining duration the way the auction house UI shows it.

    ``90000`` -> ``"1d 1h"``, ``5000`` -> ``"1h 23m"``, ``120`` -> ``"2m"``,
    anything non-positive -> ``"Expired"``.
    """
    if seconds <= 0:
        return "Expired"

    days = seconds // SECONDS_PER_DAY
    hours = (seconds % SECONDS_PER_DAY) // SECONDS_PER_HOUR
    minutes = (seconds % SECONDS_PER_HOUR) // SECONDS_PER_MINUTE

    if days > 0:
        return f"{days}d {hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_money(copper: int | None) -> str:
    """Split an amount of copper into gold, silver and copper components."""
    if not copper:
        return "0c"

    gold = copper // COPPER_PER_GOLD
    silver = (copper % COPPER_PER_GOLD) // COPPER_PER_SILVER
    remainder = copper % COPPER_PER_SILVER

    parts: list[str] = []
    if gold > 0:
        parts.append(f"{gold}g")
    if silver > 0:
        parts.append(f"{silver}s")
    if remainder > 0 or not parts:
        parts.append(f"{remainder}c")
    return " ".join(parts)


def quality_name(quality: int | None) -> str:
    """Return the display name for an item quality index."""
    if quality is None or not 0 <= quality < len(QUALITY_NAMES):
        return "Unknown"
    return QUALITY_NAMES[quality]


def _as_int(record: Mapping[str, Any], key: str) -> int:
    value = record[key]
    if value is None:
        raise TypeError(f"column {key!r} is NULL")
    return int(value)


@dataclass(frozen=True)
class AuctionListing:
    """A single live auction house listing with its references resolved.

    ``expires_at`` is the epoch second stored in ``auctionhouse.time``.
    """

    id: int
    house_id: int
    item_guid: int
    item_owner: int
    buyout_price: int
    expires_at: int
    buy_guid: int
    last_bid: int
    start_bid: int
    deposit: int
    item_entry: int
    count: int
    owner_name: str
    item_name: str
    quality: int
    item_level: int

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "AuctionListing":
        """Build a listing from a repository row.

        Raises ``KeyError``, ``TypeError`` or ``ValueError`` when the row is
        missing a column or carries a value that is not numeric.
        """
        return cls(
            id=_as_int(record, "id"),
            house_id=_as_int(record, "house_id"),
            item_guid=_as_int(record, "item_guid"),
            item_owner=_as_int(record, "item_owner"),
            buyout_price=_as_int(record, "buyout_price"),
            expires_at=_as_int(record, "time"),
            buy_guid=_as_int(record, "buy_guid"),
            last_bid=_as_int(record, "last_bid"),
            start_bid=_as_int(record, "start_bid"),
            deposit=_as_int(record, "deposit"),
            item_entry=_as_int(record, "item_entry"),
            count=_as_int(record, "count"),
            owner_name=str(record["owner_name"]),
            item_name=str(record["item_name"]),
            quality=_as_int(record, "quality"),
            item_level=_as_int(record, "item_level"),
        )

    def seconds_left(self, now: int) -> int:
        return self.expires_at - now

    def time_left(self, now: int) -> str:
        """Human readable remaining time relative to ``now``."""
        return format_time_left(self.seconds_left(now))


@dataclass
class AuctionStats:
    """Aggregate figures over all live listings."""

    total_items: int = 0
    total_value: int = 0
    active_bids: int = 0
    unique_owners: int = 0
    unique_items: int = 0

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "AuctionStats":
        return cls(
            total_items=int(record.get("total_items") or 0),
            total_value=int(record.get("total_value") or 0),
            unique_owners=int(record.get("unique_owners") or 0),
            unique_items=int(record.get("unique_items") or 0),
        )


@dataclass(frozen=True)
class SellerSummary:
    """Per-seller rollup of live listings."""

    name: str
    total_auctions: int
    total_value: int
    unique_items: int

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "SellerSummary":
        name = record["seller_name"]
        if name is None:
            raise TypeError("seller_name is NULL")
        return cls(
            name=str(name),
            total_auctions=_as_int(record, "total_auctions"),
            total_value=int(record.get("total_value") or 0),
            unique_items=int(record.get("unique_items") or 0),
        )
