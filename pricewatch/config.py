from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Final, List

from dotenv import load_dotenv

load_dotenv()

DEFAULT_TRACKED_COINS: Final[List[str]] = [
    "bitcoin",
    "ethereum",
    "binancecoin",
    "cardano",
    "solana",
    "polkadot",
    "avalanche-2",
    "polygon",
    "chainlink",
    "litecoin",
    "stellar",
    "uniswap",
    "algorand",
    "cosmos",
    "vechain",
    "internet-computer",
    "filecoin",
    "the-graph",
    "aave",
    "compound",
]


def _parse_csv(raw: str | None, default: List[str]) -> List[str]:
    if not raw:
        return list(default)
    return [token.strip().lower() for token in raw.split(",") if token.strip()]


def _parse_bool(raw: str | None, default: bool) -> bool:
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass(slots=True)
class Settings:
    """Central configuration driven by environment variables."""

    coingecko_base_url: str = os.getenv("COINGECKO_BASE_URL", "https://api.coingecko.com/api/v3")
    vs_currency: str = os.getenv("VS_CURRENCY", "usd")
    tracked_coins: List[str] = field(
        default_factory=lambda: _parse_csv(os.getenv("TRACKED_COINS"), DEFAULT_TRACKED_COINS)
    )
    request_timeout_seconds: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "15"))
    refresh_interval_seconds: float = float(os.getenv("REFRESH_INTERVAL_SECONDS", "30"))
    liveness_probe: bool = _parse_bool(os.getenv("LIVENESS_PROBE"), True)
    primary_page_size: int = int(os.getenv("PRIMARY_PAGE_SIZE", "50"))
    alternate_page_size: int = int(os.getenv("ALTERNATE_PAGE_SIZE", "20"))

    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def __post_init__(self) -> None:
        # logging only accepts upper-case level names
        self.log_level = self.log_level.strip().upper()

    @property
    def resolved_base_url(self) -> str:
        return self.coingecko_base_url.rstrip("/")


# Singleton-style settings import
settings: Final[Settings] = Settings()
