from __future__ import annotations

from datetime import datetime
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class DisplayRecord(BaseModel):
    """One tracked asset as shown in the price table."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Stable upstream identifier (lower-case).")
    name: str = Field(..., description="Asset name.")
    symbol: str = Field(..., description="Ticker symbol (upper-case).")
    current_price: float = Field(..., ge=0, description="Last price in USD.")
    change_percent_24h: Optional[float] = Field(
        None, description="Percentage change over the last 24h (can be null if upstream omits it)."
    )
    total_volume: float = Field(..., ge=0, description="24h trading volume in USD.")
    market_cap: float = Field(..., ge=0, description="Market capitalization in USD.")


class CoinMarket(BaseModel):
    """Element of the CoinGecko `/coins/markets` listing; other fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    id: str
    symbol: str
    name: str
    # null for thinly traded coins; shown as 0 rather than rejecting the listing
    current_price: Optional[float]
    total_volume: Optional[float]
    market_cap: Optional[float]
    price_change_percentage_24h: Optional[float] = None

    def to_display_record(self) -> DisplayRecord:
        return DisplayRecord(
            id=self.id,
            name=self.name,
            symbol=self.symbol.upper(),
            current_price=self.current_price or 0.0,
            change_percent_24h=self.price_change_percentage_24h,
            total_volume=self.total_volume or 0.0,
            market_cap=self.market_cap or 0.0,
        )


class Snapshot(BaseModel):
    """Complete display state; replaced wholesale at the end of every cycle."""

    model_config = ConfigDict(frozen=True)

    records: Tuple[DisplayRecord, ...]
    last_updated: Optional[datetime] = Field(None, description="Completion time of the last cycle in UTC.")
    is_refreshing: bool = False
    last_error: Optional[str] = Field(None, description="Advisory message from the last failed cycle.")


class MarketStats(BaseModel):
    """Aggregate figures over a list of records."""

    total_assets: int
    total_volume_24h: float
    total_market_cap: float
    average_change_24h: float


class MarketStatsResponse(MarketStats):
    total_volume_display: str
    total_market_cap_display: str
