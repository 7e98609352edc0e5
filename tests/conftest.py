from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List

import pytest

from pricewatch.models import DisplayRecord


def _market_entry(coin_id: str, symbol: str, name: str, price: float, change: float | None = 1.5) -> Dict[str, Any]:
    return {
        "id": coin_id,
        "symbol": symbol,
        "name": name,
        "image": f"https://assets.example/{coin_id}.png",
        "current_price": price,
        "market_cap": price * 1_000_000,
        "market_cap_rank": 1,
        "total_volume": price * 10_000,
        "high_24h": price * 1.1,
        "low_24h": price * 0.9,
        "price_change_percentage_24h": change,
        "last_updated": "2024-01-01T00:00:00.000Z",
    }


@pytest.fixture()
def market_entry() -> Callable[..., Dict[str, Any]]:
    return _market_entry


@pytest.fixture()
def live_records() -> List[DisplayRecord]:
    return [
        DisplayRecord(
            id="bitcoin",
            name="Bitcoin",
            symbol="BTC",
            current_price=65000.0,
            change_percent_24h=1.0,
            total_volume=30e9,
            market_cap=1.28e12,
        ),
        DisplayRecord(
            id="ethereum",
            name="Ethereum",
            symbol="ETH",
            current_price=3400.0,
            change_percent_24h=-2.0,
            total_volume=15e9,
            market_cap=410e9,
        ),
        DisplayRecord(
            id="stellar",
            name="Stellar",
            symbol="XLM",
            current_price=0.11,
            change_percent_24h=None,
            total_volume=90e6,
            market_cap=3.2e9,
        ),
    ]


class FakeSource:
    """Market data source returning scripted outcomes, optionally held behind a gate."""

    name = "Fake"

    def __init__(self, outcomes: List[Any], gated: bool = False) -> None:
        self.outcomes = list(outcomes)
        self.calls = 0
        self.started = asyncio.Event()
        self.gate = asyncio.Event()
        if not gated:
            self.gate.set()

    async def fetch_prices(self, client):
        self.calls += 1
        outcome = self.outcomes[min(self.calls, len(self.outcomes)) - 1]
        self.started.set()
        await self.gate.wait()
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture()
def fake_source() -> Callable[..., FakeSource]:
    return FakeSource
