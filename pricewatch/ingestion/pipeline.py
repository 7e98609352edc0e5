from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional

import httpx

from pricewatch.config import settings
from pricewatch.ingestion.sources import MarketDataError, MarketDataSource, default_source
from pricewatch.models import Snapshot
from pricewatch.storage import SnapshotStore

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Runs fetch-or-fallback cycles against a snapshot store.

    The timer loop and the manual trigger both go through `refresh()`, so at
    most one cycle is in flight; a trigger that arrives mid-cycle joins it.
    """

    def __init__(
        self,
        store: SnapshotStore,
        source: MarketDataSource,
        interval_seconds: float,
        request_timeout_seconds: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.store = store
        self.source = source
        self.interval_seconds = interval_seconds
        self.request_timeout_seconds = request_timeout_seconds
        self.transport = transport
        self._stop_event: Optional[asyncio.Event] = None
        self._loop_task: Optional[asyncio.Task] = None
        self._inflight: Optional[asyncio.Task] = None
        self._stopped = False

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def in_flight(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    def start(self) -> None:
        """Spawn the timer loop; the first cycle runs immediately."""
        if self._stopped:
            raise RuntimeError("scheduler has been stopped")
        if self.running:
            logger.warning("Refresh scheduler already started")
            return
        self._stop_event = asyncio.Event()
        self._loop_task = asyncio.create_task(self._run_forever(self._stop_event), name="price-refresh")
        logger.info("Refresh scheduler started | interval_s=%s", self.interval_seconds)

    async def stop(self) -> None:
        """Stop the timer and release the store.

        A cycle still in flight is left to finish on its own; its result is
        dropped because the store is closed first.
        """
        if self._stopped:
            return
        self._stopped = True
        self.store.close()
        if self._stop_event is not None:
            self._stop_event.set()
        if self._loop_task is not None:
            self._loop_task.cancel()
            await asyncio.gather(self._loop_task, return_exceptions=True)
            self._loop_task = None
        logger.info("Refresh scheduler stopped")

    async def refresh(self) -> Snapshot:
        """Run one cycle now, or wait for the one already running."""
        if self._stopped:
            return self.store.current()
        if not self.in_flight:
            self._inflight = asyncio.create_task(self._run_cycle())
        # shield: cancelling a waiter must not abort the shared cycle
        return await asyncio.shield(self._inflight)

    async def _run_forever(self, stop_event: asyncio.Event) -> None:
        while not stop_event.is_set():
            await self.refresh()
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                pass

    async def _run_cycle(self) -> Snapshot:
        self.store.begin_cycle()
        start = time.perf_counter()
        try:
            timeout = httpx.Timeout(self.request_timeout_seconds)
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True, transport=self.transport) as client:
                records = await self.source.fetch_prices(client)
        except MarketDataError as exc:
            logger.warning("Refresh failed, showing fallback data: %s", exc)
            return self.store.complete_failure(str(exc))
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected error while refreshing from %s", self.source.name)
            return self.store.complete_failure(str(exc) or type(exc).__name__)

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.info("Refresh completed | records=%s | %dms", len(records), elapsed_ms)
        return self.store.complete_success(records)


def build_scheduler(store: Optional[SnapshotStore] = None) -> RefreshScheduler:
    """Create a scheduler with default settings and source."""
    return RefreshScheduler(
        store=store or SnapshotStore(),
        source=default_source(),
        interval_seconds=settings.refresh_interval_seconds,
        request_timeout_seconds=settings.request_timeout_seconds,
    )
