from __future__ import annotations

from typing import Iterator

import pytest
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from azerothcore_ah.app.config import Settings

NOW = 1_700_000_000

SCHEMA = [
    """
    CREATE TABLE characters (
        guid INTEGER PRIMARY KEY,
        name TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE item_instance (
        guid INTEGER PRIMARY KEY,
        itemEntry INTEGER NOT NULL,
        count INTEGER NOT NULL DEFAULT 1
    )
    """,
    """
    CREATE TABLE auctionhouse (
        id INTEGER PRIMARY KEY,
        houseid INTEGER NOT NULL DEFAULT 7,
        itemguid INTEGER NOT NULL,
        itemowner INTEGER NOT NULL,
        buyoutprice INTEGER NOT NULL DEFAULT 0,
        time INTEGER NOT NULL,
        buyguid INTEGER NOT NULL DEFAULT 0,
        lastbid INTEGER NOT NULL DEFAULT 0,
        startbid INTEGER NOT NULL DEFAULT 0,
        deposit INTEGER NOT NULL DEFAULT 0
    )
    """,
    """
    CREATE TABLE acore_world.item_template (
        entry INTEGER PRIMARY KEY,
        name TEXT NOT NULL,
        Quality INTEGER NOT NULL DEFAULT 0,
        ItemLevel INTEGER NOT NULL DEFAULT 0
    )
    """,
]

CHARACTERS = [(1, "Arthas"), (2, "Jaina"), (3, "Thrall")]

ITEM_TEMPLATES = [
    (2589, "Linen Cloth", 1, 5),
    (19019, "Thunderfury", 5, 80),
    (33470, "Frostweave Cloth", 1, 80),
    (4000, "Mystery 100% Box", 2, 20),
]

ITEM_INSTANCES = [
    (101, 2589, 20),
    (102, 19019, 1),
    (103, 33470, 10),
    (104, 2589, 5),
    (105, 2589, 1),
    (106, 99999, 1),
    (107, 4000, 3),
]

# id, itemguid, itemowner, buyoutprice, time, buyguid, lastbid, startbid, deposit
AUCTIONS = [
    (1, 101, 1, 50_000, NOW + 5_000, 0, 0, 40_000, 100),
    (2, 102, 2, 10_000_000, NOW + 90_000, 3, 9_000_000, 8_000_000, 5_000),
    (3, 103, 1, 120_000, NOW + 120, 0, 0, 100_000, 200),
    (4, 104, 3, 0, NOW + 43_200, 2, 1_500, 1_000, 50),
    # expired, carries a bid so the bid count proves the liveness filter
    (5, 105, 2, 999, NOW - 10, 1, 700, 500, 10),
    # owner without a character row, item without a template row
    (6, 106, 99, 2_500, NOW + 600, 0, 0, 2_000, 10),
    (7, 107, 3, 4_242, NOW + 7_200, 0, 0, 4_000, 10),
]

LIVE_IDS_BY_EXPIRY = [3, 6, 1, 7, 4, 2]


def fixed_clock() -> float:
    return float(NOW)


def make_engine() -> Engine:
    """In-memory SQLite engine with the world database attached."""

    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _attach_world(dbapi_connection, connection_record):  # type: ignore[no-untyped-def]
        dbapi_connection.execute("ATTACH DATABASE ':memory:' AS acore_world")

    return engine


def create_schema(engine: Engine) -> None:
    with engine.begin() as conn:
        for statement in SCHEMA:
            conn.execute(text(statement))


def insert_auction(conn, row: tuple) -> None:
    conn.execute(
        text(
            """
            INSERT INTO auctionhouse (
                id, itemguid, itemowner, buyoutprice, time,
                buyguid, lastbid, startbid, deposit
            )
            VALUES (:id, :itemguid, :itemowner, :buyoutprice, :time,
                    :buyguid, :lastbid, :startbid, :deposit)
            """
        ),
        dict(
            zip(
                (
                    "id",
                    "itemguid",
                    "itemowner",
                    "buyoutprice",
                    "time",
                    "buyguid",
                    "lastbid",
                    "startbid",
                    "deposit",
                ),
                row,
            )
        ),
    )


def seed(engine: Engine) -> None:
    with engine.begin() as conn:
        for guid, name in CHARACTERS:
            conn.execute(
                text("INSERT INTO characters (guid, name) VALUES (:guid, :name)"),
                {"guid": guid, "name": name},
            )
        for entry, name, quality, level in ITEM_TEMPLATES:
            conn.execute(
                text(
                    "INSERT INTO acore_world.item_template (entry, name, Quality, ItemLevel) "
                    "VALUES (:entry, :name, :quality, :level)"
                ),
                {"entry": entry, "name": name, "quality": quality, "level": level},
            )
        for guid, entry, count in ITEM_INSTANCES:
            conn.execute(
                text(
                    "INSERT INTO item_instance (guid, itemEntry, count) "
                    "VALUES (:guid, :entry, :count)"
                ),
                {"guid": guid, "entry": entry, "count": count},
            )
        for row in AUCTIONS:
            insert_auction(conn, row)


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = make_engine()
    create_schema(engine)
    seed(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def empty_engine() -> Iterator[Engine]:
    """Engine whose database has no auction tables at all."""

    engine = make_engine()
    yield engine
    engine.dispose()


@pytest.fixture
def settings() -> Settings:
    return Settings()
