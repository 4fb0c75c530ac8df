"""
Centralized DTOs for API and CLI responses.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from azerothcore_ah.domain.models import (AuctionListing, AuctionStats,
                                          SellerSummary)


class AuctionListingView(BaseModel):
    """A live listing as served by ``/api/auctions`` and ``/api/search``."""

    model_config = ConfigDict(extra="forbid")

    id: int
    house_id: int
    item_guid: int
    item_owner: int
    buyout_price: int
    time: int = Field(description="Expiry as epoch seconds.")
    buy_guid: int
    last_bid: int
    start_bid: int
    deposit: int
    item_entry: int
    item_name: str
    owner_name: str
    count: int
    quality: int
    item_level: int
    time_left: str

    @classmethod
    def from_domain(cls, listing: AuctionListing, now: int) -> "AuctionListingView":
        return cls(
            id=listing.id,
            house_id=listing.house_id,
            item_guid=listing.item_guid,
            item_owner=listing.item_owner,
            buyout_price=listing.buyout_price,
            time=listing.expires_at,
            buy_guid=listing.buy_guid,
            last_bid=listing.last_bid,
            start_bid=listing.start_bid,
            deposit=listing.deposit,
            item_entry=listing.item_entry,
            item_name=listing.item_name,
            owner_name=listing.owner_name,
            count=listing.count,
            quality=listing.quality,
            item_level=listing.item_level,
            time_left=listing.time_left(now),
        )


class AuctionStatsView(BaseModel):
    model_config = ConfigDict(extra="forbid")

    total_items: int = 0
    total_value: int = 0
    active_bids: int = 0
    unique_owners: int = 0
    unique_items: int = 0

    @classmethod
    def from_domain(cls, stats: AuctionStats) -> "AuctionStatsView":
        return cls(
            total_items=stats.total_items,
            total_value=stats.total_value,
            active_bids=stats.active_bids,
            unique_owners=stats.unique_owners,
            unique_items=stats.unique_items,
        )


class SellerSummaryView(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    total_auctions: int
    total_value: int
    unique_items: int

    @classmethod
    def from_domain(cls, seller: SellerSummary) -> "SellerSummaryView":
        return cls(
            name=seller.name,
            total_auctions=seller.total_auctions,
            total_value=seller.total_value,
            unique_items=seller.unique_items,
        )


# --- Envelopes ---
class AuctionPageResponse(BaseModel):
    auctions: list[AuctionListingView] = Field(default_factory=list)
    page: int
    limit: int


class AuctionSearchResponse(BaseModel):
    auctions: list[AuctionListingView] = Field(default_factory=list)
    search: str


class SellerListResponse(BaseModel):
    sellers: list[SellerSummaryView] = Field(default_factory=list)
