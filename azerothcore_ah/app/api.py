"""FastAPI application serving the auction house dashboard.

Run with ``azerothcore-ah serve`` or
``uvicorn azerothcore_ah.app.api:create_app --factory``.
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from functools import lru_cache
from importlib import resources
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from azerothcore_ah import __version__
from azerothcore_ah.app.config import Settings, load_settings
from azerothcore_ah.app.dependencies import AuctionViewServiceDep
from azerothcore_ah.infrastructure.db import (DatabaseError, check_connection,
                                              create_db_engine)
from azerothcore_ah.infrastructure.observability import (format_prometheus,
                                                         get_logger,
                                                         log_exception,
                                                         record_api_request)
from azerothcore_ah.services.auctions import Clock
from azerothcore_ah.services.dto import (AuctionPageResponse,
                                         AuctionSearchResponse,
                                         AuctionStatsView, SellerListResponse)

logger = get_logger(__name__)

UNMATCHED_ENDPOINT = "unmatched"


@lru_cache(maxsize=1)
def load_index_page() -> str:
    """The dashboard page, shipped as package data and served verbatim."""
    return (
        resources.files("azerothcore_ah.app")
        .joinpath("static/index.html")
        .read_text(encoding="utf-8")
    )


def require_search_term(q: str | None = Query(None, description="Item or seller name fragment")) -> str:
    if q is None or not q.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Search term required"
        )
    return q


SearchTermDep = Annotated[str, Depends(require_search_term)]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create and verify the pooled engine unless one was injected."""
    owns_engine = getattr(app.state, "engine", None) is None
    if owns_engine:
        settings: Settings = app.state.settings
        engine = create_db_engine(settings.database)
        try:
            check_connection(engine)
        except DatabaseError as exc:
            logger.critical("Error connecting to database: %s", exc)
            engine.dispose()
            raise
        app.state.engine = engine
        logger.info(
            "Connected to database %s successfully", settings.database.describe()
        )

    yield

    if owns_engine:
        app.state.engine.dispose()
        app.state.engine = None
        logger.info("Database pool disposed")


def create_app(
    settings: Settings | None = None,
    *,
    engine: Engine | None = None,
    clock: Clock = time.time,
) -> FastAPI:
    """Build the application.

    Args:
        settings: Loaded settings; read from the environment when omitted.
        engine: Pre-built engine. When given, the lifespan neither creates
            nor disposes one, and the caller is responsible for it.
        clock: Epoch-seconds source used for liveness and time-left labels.
    """
    app = FastAPI(
        title="AzerothCore Auction House",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings if settings is not None else load_settings()
    app.state.engine = engine
    app.state.clock = clock

    @app.middleware("http")
    async def record_request_metrics(request: Request, call_next):
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            route = request.scope.get("route")
            # Unrouted paths share one label so scanners cannot grow the registry.
            endpoint = getattr(route, "path", UNMATCHED_ENDPOINT)
            record_api_request(
                endpoint, request.method, status_code, time.perf_counter() - started
            )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(
        request: Request, exc: SQLAlchemyError
    ) -> JSONResponse:
        log_exception(logger, "Query failed", exc, path=request.url.path)
        detail = str(getattr(exc, "orig", None) or exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": detail},
        )

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    def index() -> HTMLResponse:
        return HTMLResponse(load_index_page())

    @app.get("/api/auctions", response_model=AuctionPageResponse)
    def list_auctions(
        service: AuctionViewServiceDep,
        page: str | None = Query(None, description="1-based page number"),
    ) -> AuctionPageResponse:
        """Live listings, soonest-expiring first, fifty per page."""
        return service.list_page(page)

    @app.get("/api/stats", response_model=AuctionStatsView)
    def get_stats(service: AuctionViewServiceDep) -> AuctionStatsView:
        return service.stats()

    @app.get("/api/search", response_model=AuctionSearchResponse)
    def search_auctions(
        term: SearchTermDep,
        service: AuctionViewServiceDep,
    ) -> AuctionSearchResponse:
        """Case-insensitive match on item or seller name, capped at 100 rows."""
        return service.search(term)

    @app.get("/api/sellers", response_model=SellerListResponse)
    def list_sellers(service: AuctionViewServiceDep) -> SellerListResponse:
        return service.sellers()

    @app.get("/metrics", response_class=PlainTextResponse, include_in_schema=False)
    def metrics() -> PlainTextResponse:
        return PlainTextResponse(format_prometheus())

    return app
