from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Protocol, Sequence

import httpx
from pydantic import TypeAdapter, ValidationError

from pricewatch.config import settings
from pricewatch.models import CoinMarket, DisplayRecord

logger = logging.getLogger(__name__)

_LISTING_ADAPTER = TypeAdapter(List[CoinMarket])


class MarketDataError(Exception):
    """Base class for every failure reported by a market data source."""


class UpstreamUnreachable(MarketDataError):
    """Liveness probe failed; the listing request was not attempted."""


class UpstreamError(MarketDataError):
    """Upstream answered with a non-success HTTP status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitedOrForbidden(UpstreamError):
    """HTTP 429 or 403."""


class TransportError(MarketDataError):
    """Network failure or a body that could not be decoded into market records."""


class MarketDataSource(Protocol):
    name: str

    async def fetch_prices(self, client: httpx.AsyncClient) -> List[DisplayRecord]: ...


class CoinGeckoSource:
    """Public CoinGecko markets endpoint (no API key)."""

    name = "CoinGecko"

    def __init__(
        self,
        coin_ids: Sequence[str],
        base_url: str = "https://api.coingecko.com/api/v3",
        vs_currency: str = "usd",
        primary_page_size: int = 50,
        alternate_page_size: int = 20,
        liveness_probe: bool = True,
    ) -> None:
        self.coin_ids = list(coin_ids)
        self.base_url = base_url.rstrip("/")
        self.vs_currency = vs_currency
        self.primary_page_size = primary_page_size
        self.alternate_page_size = alternate_page_size
        self.liveness_probe = liveness_probe

    @property
    def markets_url(self) -> str:
        return f"{self.base_url}/coins/markets"

    def primary_params(self) -> Dict[str, Any]:
        return {
            "vs_currency": self.vs_currency,
            "ids": ",".join(self.coin_ids),
            "order": "market_cap_desc",
            "per_page": self.primary_page_size,
            "page": 1,
            "sparkline": "false",
            "price_change_percentage": "24h",
        }

    def alternate_params(self) -> Dict[str, Any]:
        params = self.primary_params()
        params.pop("ids")
        params["per_page"] = self.alternate_page_size
        return params

    async def ping(self, client: httpx.AsyncClient) -> bool:
        """Return True when the upstream `/ping` answers with any 2xx."""
        try:
            resp = await client.get(f"{self.base_url}/ping")
        except httpx.HTTPError as exc:
            logger.warning("%s ping failed: %s", self.name, exc)
            return False
        logger.debug("%s ping status %s", self.name, resp.status_code)
        return resp.is_success

    async def fetch_prices(self, client: httpx.AsyncClient) -> List[DisplayRecord]:
        if self.liveness_probe and not await self.ping(client):
            raise UpstreamUnreachable(f"{self.name} API is not accessible")

        try:
            records = await self._fetch_listing(client, self.primary_params(), label="API")
        except RateLimitedOrForbidden as exc:
            # One alternate attempt without the ids filter; its outcome is final.
            logger.warning("%s; retrying with the unfiltered top-%s listing", exc, self.alternate_page_size)
            records = await self._fetch_listing(client, self.alternate_params(), label="alternate listing")

        logger.info("Fetched %s records from %s", len(records), self.name)
        return records

    async def _fetch_listing(
        self, client: httpx.AsyncClient, params: Dict[str, Any], label: str
    ) -> List[DisplayRecord]:
        try:
            resp = await client.get(self.markets_url, params=params, headers={"Accept": "application/json"})
        except httpx.HTTPError as exc:
            raise TransportError(f"{self.name} {label} request failed: {exc!r}") from exc

        if not resp.is_success:
            message = f"{self.name} {label} error: {resp.status_code} {resp.reason_phrase}".rstrip()
            if resp.status_code in (403, 429):
                raise RateLimitedOrForbidden(message, resp.status_code)
            raise UpstreamError(message, resp.status_code)

        try:
            payload = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise TransportError(f"{self.name} {label} returned malformed JSON") from exc

        try:
            markets = _LISTING_ADAPTER.validate_python(payload)
            records = [market.to_display_record() for market in markets]
        except ValidationError as exc:
            raise TransportError(
                f"{self.name} {label} returned an unexpected payload ({exc.error_count()} invalid fields)"
            ) from exc

        if not records:
            raise TransportError(f"{self.name} {label} returned an empty listing")
        return records


def default_source() -> CoinGeckoSource:
    """Factory for the configured source."""
    return CoinGeckoSource(
        coin_ids=settings.tracked_coins,
        base_url=settings.resolved_base_url,
        vs_currency=settings.vs_currency,
        primary_page_size=settings.primary_page_size,
        alternate_page_size=settings.alternate_page_size,
        liveness_probe=settings.liveness_probe,
    )
