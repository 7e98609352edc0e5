from __future__ import annotations

from pricewatch.config import DEFAULT_TRACKED_COINS, Settings, _parse_bool
from pricewatch.ingestion.sources import CoinGeckoSource, default_source


def test_tracked_coins_from_env(monkeypatch):
    monkeypatch.setenv("TRACKED_COINS", "Bitcoin, solana,,")
    assert Settings().tracked_coins == ["bitcoin", "solana"]


def test_tracked_coins_default(monkeypatch):
    monkeypatch.delenv("TRACKED_COINS", raising=False)
    assert Settings().tracked_coins == DEFAULT_TRACKED_COINS
    assert len(DEFAULT_TRACKED_COINS) == 20


def test_parse_bool():
    assert _parse_bool(None, True) is True
    assert _parse_bool("off", True) is False
    assert _parse_bool(" Yes ", False) is True


def test_base_url_strips_trailing_slash():
    assert Settings(coingecko_base_url="https://proxy.test/api/v3/").resolved_base_url == "https://proxy.test/api/v3"


def test_default_source_uses_settings():
    source = default_source()
    assert isinstance(source, CoinGeckoSource)
    assert source.markets_url.endswith("/coins/markets")
    assert source.alternate_params()["per_page"] == source.alternate_page_size


def test_log_level_is_normalized_for_logging():
    assert Settings(log_level=" info ").log_level == "INFO"
    assert Settings(log_level="debug").log_level == "DEBUG"
