from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware

from pricewatch.config import settings
from pricewatch.ingestion.pipeline import RefreshScheduler, build_scheduler
from pricewatch.market_stats import SortKey, filter_records, sort_records, summarize_for_display
from pricewatch.models import DisplayRecord, MarketStatsResponse, Snapshot

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(scheduler: Optional[RefreshScheduler] = None) -> FastAPI:
    scheduler = scheduler or build_scheduler()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        scheduler.start()
        try:
            yield
        finally:
            await scheduler.stop()

    app = FastAPI(
        title="Crypto Price Watch API",
        version="0.1.0",
        description="Live CoinGecko prices with a static fallback for the price-watch dashboard.",
        lifespan=lifespan,
    )
    app.state.scheduler = scheduler

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    @app.get("/snapshot", response_model=Snapshot)
    async def current_snapshot() -> Snapshot:
        return scheduler.store.current()

    @app.get("/markets", response_model=List[DisplayRecord])
    async def list_markets(
        search: Optional[str] = Query(None, description="Case-insensitive match on name or symbol"),
        sort: Optional[SortKey] = Query(None, description="Field to sort by; upstream order when omitted"),
        descending: bool = Query(False, description="Sort in descending order"),
    ) -> List[DisplayRecord]:
        records = filter_records(scheduler.store.current().records, search)
        if sort:
            records = sort_records(records, sort, descending=descending)
        return records

    @app.get("/stats", response_model=MarketStatsResponse)
    async def market_stats(
        search: Optional[str] = Query(None, description="Case-insensitive match on name or symbol"),
    ) -> MarketStatsResponse:
        records = filter_records(scheduler.store.current().records, search)
        return summarize_for_display(records)

    @app.post("/refresh", response_model=Snapshot)
    async def trigger_refresh(background: bool = Query(False, description="Run the refresh as a background task")):
        """Refresh prices now. Use `background=true` to return immediately."""
        if background:
            asyncio.create_task(scheduler.refresh())
            return scheduler.store.current()

        return await scheduler.refresh()

    return app


app = create_app()
