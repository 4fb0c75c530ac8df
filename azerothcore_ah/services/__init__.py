"""Service layer for auction house views."""

from .auctions import AuctionViewService, EmptySearchTermError, normalize_page

__all__ = ["AuctionViewService", "EmptySearchTermError", "normalize_page"]
