from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Sequence

from pricewatch.fallback import FALLBACK_RECORDS
from pricewatch.models import DisplayRecord, Snapshot

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def fallback_message(reason: str) -> str:
    return f"Failed to load cryptocurrency data: {reason}. Using fallback data."


class SnapshotStore:
    """In-memory holder of the current snapshot.

    Written only by the refresh scheduler; any number of readers call
    `current()`. Once `close()` has been called every write is dropped.
    """

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._snapshot = Snapshot(records=FALLBACK_RECORDS)
        self._version = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def version(self) -> int:
        """Number of completed-cycle writes applied so far."""
        return self._version

    def current(self) -> Snapshot:
        with self._lock:
            return self._snapshot

    def close(self) -> None:
        """Release the store; the refreshing flag is cleared as the final write."""
        with self._lock:
            if self._closed:
                return
            self._snapshot = self._snapshot.model_copy(update={"is_refreshing": False})
            self._closed = True
        logger.debug("Snapshot store closed at version %s", self._version)

    def begin_cycle(self) -> Snapshot:
        return self._replace(is_refreshing=True)

    def complete_success(self, records: Sequence[DisplayRecord]) -> Snapshot:
        return self._replace(
            completes_cycle=True,
            records=tuple(records),
            last_updated=self._clock(),
            last_error=None,
            is_refreshing=False,
        )

    def complete_failure(self, reason: str) -> Snapshot:
        return self._replace(
            completes_cycle=True,
            records=FALLBACK_RECORDS,
            last_updated=self._clock(),
            last_error=fallback_message(reason),
            is_refreshing=False,
        )

    def _replace(self, completes_cycle: bool = False, **changes) -> Snapshot:
        with self._lock:
            if self._closed:
                logger.info("Dropping snapshot write after the store was closed")
                return self._snapshot
            self._snapshot = self._snapshot.model_copy(update=changes)
            if completes_cycle:
                self._version += 1
            return self._snapshot

