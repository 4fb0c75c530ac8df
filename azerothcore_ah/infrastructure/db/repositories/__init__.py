from .auctions import LISTING_PAGE_SIZE, SEARCH_RESULT_LIMIT, AuctionRepository
from .base import BaseRepository

__all__ = [
    "LISTING_PAGE_SIZE",
    "SEARCH_RESULT_LIMIT",
    "AuctionRepository",
    "BaseRepository",
]
