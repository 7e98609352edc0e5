from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from pricewatch.fallback import FALLBACK_RECORDS
from pricewatch.storage import SnapshotStore

FIXED_NOW = datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)


@pytest.fixture()
def store() -> SnapshotStore:
    return SnapshotStore(clock=lambda: FIXED_NOW)


def test_initial_snapshot_shows_fallback_without_error(store):
    snapshot = store.current()

    assert snapshot.records == FALLBACK_RECORDS
    assert snapshot.last_updated is None
    assert snapshot.last_error is None
    assert snapshot.is_refreshing is False
    assert store.version == 0


def test_fallback_dataset_shape():
    assert len(FALLBACK_RECORDS) == 20
    assert FALLBACK_RECORDS[0].id == "bitcoin"
    assert FALLBACK_RECORDS[-1].id == "compound"
    assert all(r.symbol == r.symbol.upper() for r in FALLBACK_RECORDS)
    assert len({r.id for r in FALLBACK_RECORDS}) == 20


def test_begin_cycle_only_flips_refreshing(store, live_records):
    store.complete_success(live_records)
    before = store.current()

    during = store.begin_cycle()

    assert during.is_refreshing is True
    assert during.records == before.records
    assert during.last_updated == before.last_updated
    assert during.last_error == before.last_error
    assert store.version == 1


def test_success_replaces_records_and_clears_error(store, live_records):
    store.complete_failure("boom")
    store.begin_cycle()

    snapshot = store.complete_success(live_records)

    assert snapshot.records == tuple(live_records)
    assert snapshot.last_updated == FIXED_NOW
    assert snapshot.last_error is None
    assert snapshot.is_refreshing is False
    assert store.version == 2


def test_failure_restores_fallback_with_message(store, live_records):
    store.complete_success(live_records)
    store.begin_cycle()

    snapshot = store.complete_failure("CoinGecko API error: 500 Internal Server Error")

    assert snapshot.records == FALLBACK_RECORDS
    assert snapshot.last_updated == FIXED_NOW
    assert snapshot.is_refreshing is False
    assert "500" in snapshot.last_error
    assert snapshot.last_error.endswith("Using fallback data.")


def test_closed_store_drops_writes(store, live_records):
    store.begin_cycle()
    store.close()

    store.complete_success(live_records)
    store.complete_failure("late")

    snapshot = store.current()
    assert store.closed
    assert store.version == 0
    assert snapshot.records == FALLBACK_RECORDS
    assert snapshot.last_error is None
    assert snapshot.is_refreshing is False


def test_close_is_idempotent(store):
    store.close()
    store.close()
    assert store.closed
    assert store.current().is_refreshing is False


def test_snapshots_are_immutable(store):
    snapshot = store.current()
    with pytest.raises(ValidationError):
        snapshot.is_refreshing = True
    with pytest.raises(ValidationError):
        snapshot.records[0].current_price = 1.0
