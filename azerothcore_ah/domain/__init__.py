"""Domain layer: auction house read models and formatting rules."""

from .models import (AuctionListing, AuctionStats, SellerSummary,
                     format_money, format_time_left, quality_name)

__all__ = [
    "AuctionListing",
    "AuctionStats",
    "SellerSummary",
    "format_money",
    "format_time_left",
    "quality_name",
]
