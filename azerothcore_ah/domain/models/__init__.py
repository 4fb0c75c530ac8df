from .auction import (QUALITY_NAMES, AuctionListing, AuctionStats,
                      SellerSummary, format_money, format_time_left,
                      quality_name)

__all__ = [
    "QUALITY_NAMES",
    "AuctionListing",
    "AuctionStats",
    "SellerSummary",
    "format_money",
    "format_time_left",
    "quality_name",
]
