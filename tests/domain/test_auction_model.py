import pytest

from azerothcore_ah.domain.models import (AuctionListing, AuctionStats,
                                          SellerSummary, format_money,
                                          format_time_left, quality_name)


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (90_000, "1d 1h"),
        (5_000, "1h 23m"),
        (120, "2m"),
        (59, "0m"),
        (3_600, "1h 0m"),
        (86_400, "1d 0h"),
        (0, "Expired"),
        (-30, "Expired"),
    ],
)
def test_format_time_left(seconds, expected):
    assert format_time_left(seconds) == expected


@pytest.mark.parametrize(
    ("copper", "expected"),
    [
        (0, "0c"),
        (None, "0c"),
        (5, "5c"),
        (100, "1s"),
        (10_000, "1g"),
        (12_345, "1g 23s 45c"),
        (10_000_000, "1000g"),
        (10_005, "1g 5c"),
    ],
)
def test_format_money(copper, expected):
    assert format_money(copper) == expected


def test_quality_name_falls_back_to_unknown():
    assert quality_name(0) == "Poor"
    assert quality_name(4) == "Epic"
    assert quality_name(5) == "Legendary"
    assert quality_name(6) == "Unknown"
    assert quality_name(-1) == "Unknown"
    assert quality_name(None) == "Unknown"


def _record(**overrides):
    record = {
        "id": 1,
        "house_id": 7,
        "item_guid": 101,
        "item_owner": 1,
        "buyout_price": 50_000,
        "time": 1_000_000,
        "buy_guid": 0,
        "last_bid": 0,
        "start_bid": 40_000,
        "deposit": 100,
        "item_entry": 2589,
        "count": 20,
        "owner_name": "Arthas",
        "item_name": "Linen Cloth",
        "quality": 1,
        "item_level": 5,
    }
    record.update(overrides)
    return record


def test_listing_from_record_and_time_left():
    listing = AuctionListing.from_record(_record())

    assert listing.expires_at == 1_000_000
    assert listing.time_left(1_000_000 - 5_000) == "1h 23m"
    assert listing.time_left(1_000_000) == "Expired"


@pytest.mark.parametrize(
    "bad",
    [
        {"buyout_price": None},
        {"time": "soon"},
    ],
)
def test_listing_from_record_rejects_undecodable_values(bad):
    with pytest.raises((TypeError, ValueError)):
        AuctionListing.from_record(_record(**bad))


def test_listing_from_record_rejects_missing_column():
    record = _record()
    del record["item_name"]
    with pytest.raises(KeyError):
        AuctionListing.from_record(record)


def test_stats_from_record_treats_null_sum_as_zero():
    stats = AuctionStats.from_record(
        {"total_items": 0, "total_value": None, "unique_owners": 0, "unique_items": 0}
    )

    assert stats == AuctionStats()


def test_seller_from_record_rejects_null_name():
    with pytest.raises(TypeError):
        SellerSummary.from_record(
            {"seller_name": None, "total_auctions": 1, "total_value": 1, "unique_items": 1}
        )
