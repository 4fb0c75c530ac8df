"""Read-only auction house views for the API and the CLI."""

from __future__ import annotations

import time
from typing import Any, Callable, Iterable, Mapping, Protocol

from sqlalchemy.exc import SQLAlchemyError

from azerothcore_ah.domain.models import (AuctionListing, AuctionStats,
                                          SellerSummary)
from azerothcore_ah.infrastructure.db.repositories import (LISTING_PAGE_SIZE,
                                                           SEARCH_RESULT_LIMIT)
from azerothcore_ah.infrastructure.observability import (Timer, get_logger,
                                                         record_skipped_row,
                                                         record_stats_degraded)
from azerothcore_ah.infrastructure.observability.metrics import QUERY_DURATION
from azerothcore_ah.services.dto import (AuctionListingView,
                                         AuctionPageResponse,
                                         AuctionSearchResponse,
                                         AuctionStatsView, SellerListResponse,
                                         SellerSummaryView)

Clock = Callable[[], float]
Row = Mapping[str, Any]

_DECODE_ERRORS = (KeyError, TypeError, ValueError)


class AuctionQueries(Protocol):
    def list_live(self, now: int, *, limit: int = ..., offset: int = ...) -> list[dict[str, Any]]: ...

    def search_live(self, term: str, now: int, *, limit: int = ...) -> list[dict[str, Any]]: ...

    def stats(self, now: int) -> dict[str, Any]: ...

    def count_active_bids(self, now: int) -> int: ...

    def sellers(self, now: int) -> list[dict[str, Any]]: ...


class EmptySearchTermError(ValueError):
    """Raised when a search is requested without a term."""


# Largest page whose OFFSET still fits a signed 64-bit SQL integer.
MAX_PAGE = (2**63 - 1) // LISTING_PAGE_SIZE


def normalize_page(raw: object) -> int:
    """Coerce a ``page`` query value to an integer in ``1..MAX_PAGE``.

    Unparseable or non-positive values fall back to 1; larger values are
    clamped to ``MAX_PAGE``, which always yields an empty page.
    """
    try:
        page = int(str(raw).strip())
    except (TypeError, ValueError):
        return 1
    if page < 1:
        return 1
    return min(page, MAX_PAGE)


class AuctionViewService:
    """Turns repository rows into response models.

    Uses repository injection pattern - caller manages connection lifecycle.
    ``clock`` returns epoch seconds and is read once per operation, so the
    liveness filter and the time-left labels agree.
    """

    def __init__(self, repository: AuctionQueries, clock: Clock = time.time) -> None:
        self._repository = repository
        self._clock = clock
        self._logger = get_logger(__name__)

    def _now(self) -> int:
        return int(self._clock())

    def _listings(self, rows: Iterable[Row], now: int) -> list[AuctionListingView]:
        views: list[AuctionListingView] = []
        for row in rows:
            try:
                listing = AuctionListing.from_record(row)
            except _DECODE_ERRORS as exc:
                self._logger.warning(
                    "Skipping auction row %s: %s", row.get("id", "?"), exc
                )
                record_skipped_row("auction")
                continue
            views.append(AuctionListingView.from_domain(listing, now))
        return views

    def list_page(self, page: object = 1) -> AuctionPageResponse:
        """One page of live listings, soonest-expiring first."""
        page_number = normalize_page(page)
        offset = (page_number - 1) * LISTING_PAGE_SIZE
        now = self._now()
        self._logger.debug("Listing auctions page=%d offset=%d", page_number, offset)

        with Timer(QUERY_DURATION, labels={"query": "list"}):
            rows = self._repository.list_live(now, limit=LISTING_PAGE_SIZE, offset=offset)

        return AuctionPageResponse(
            auctions=self._listings(rows, now),
            page=page_number,
            limit=LISTING_PAGE_SIZE,
        )

    def search(self, term: str | None) -> AuctionSearchResponse:
        """Live listings whose item or seller name contains ``term``.

        Raises:
            EmptySearchTermError: ``term`` is missing or blank; no query runs.
        """
        if term is None or not term.strip():
            raise EmptySearchTermError("Search term required")
        now = self._now()
        self._logger.debug("Searching auctions for %r", term)

        with Timer(QUERY_DURATION, labels={"query": "search"}):
            rows = self._repository.search_live(term, now, limit=SEARCH_RESULT_LIMIT)

        return AuctionSearchResponse(auctions=self._listings(rows, now), search=term)

    def stats(self) -> AuctionStatsView:
        """Aggregate figures over live listings.

        The active bid count comes from a second query; if that one fails the
        remaining figures are still returned with ``active_bids`` left at 0.
        """
        now = self._now()
        with Timer(QUERY_DURATION, labels={"query": "stats"}):
            stats = AuctionStats.from_record(self._repository.stats(now))

        try:
            stats.active_bids = self._repository.count_active_bids(now)
        except SQLAlchemyError as exc:
            self._logger.error("Error counting active bids: %s", exc)
            record_stats_degraded()

        return AuctionStatsView.from_domain(stats)

    def sellers(self) -> SellerListResponse:
        now = self._now()
        with Timer(QUERY_DURATION, labels={"query": "sellers"}):
            rows = self._repository.sellers(now)

        sellers: list[SellerSummaryView] = []
        for row in rows:
            try:
                seller = SellerSummary.from_record(row)
            except _DECODE_ERRORS as exc:
                self._logger.warning("Skipping seller row: %s", exc)
                record_skipped_row("seller")
                continue
            sellers.append(SellerSummaryView.from_domain(seller))
        return SellerListResponse(sellers=sellers)
