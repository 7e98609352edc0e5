from __future__ import annotations

from typing import Iterable, List, Literal, Sequence

from pricewatch.models import DisplayRecord, MarketStats, MarketStatsResponse

SortKey = Literal["name", "symbol", "current_price", "change_percent_24h", "total_volume", "market_cap"]


def filter_records(records: Iterable[DisplayRecord], search: str | None) -> List[DisplayRecord]:
    """Case-insensitive substring match on name or symbol."""
    needle = (search or "").strip().lower()
    if not needle:
        return list(records)
    return [r for r in records if needle in r.name.lower() or needle in r.symbol.lower()]


def sort_records(records: Iterable[DisplayRecord], key: SortKey, descending: bool = False) -> List[DisplayRecord]:
    if key in ("name", "symbol"):
        return sorted(records, key=lambda r: getattr(r, key).lower(), reverse=descending)
    return sorted(records, key=lambda r: getattr(r, key) or 0.0, reverse=descending)


def summarize(records: Sequence[DisplayRecord]) -> MarketStats:
    count = len(records)
    total_change = sum(r.change_percent_24h or 0.0 for r in records)
    return MarketStats(
        total_assets=count,
        total_volume_24h=sum(r.total_volume for r in records),
        total_market_cap=sum(r.market_cap for r in records),
        average_change_24h=total_change / count if count else 0.0,
    )


def summarize_for_display(records: Sequence[DisplayRecord]) -> MarketStatsResponse:
    stats = summarize(records)
    return MarketStatsResponse(
        **stats.model_dump(),
        total_volume_display=format_compact_usd(stats.total_volume_24h),
        total_market_cap_display=format_compact_usd(stats.total_market_cap),
    )


def format_price(price: float) -> str:
    decimals = 4 if price < 1 else 2
    return f"${price:,.{decimals}f}"


def format_compact_usd(value: float) -> str:
    if value >= 1e12:
        return f"${value / 1e12:.2f}T"
    if value >= 1e9:
        return f"${value / 1e9:.2f}B"
    if value >= 1e6:
        return f"${value / 1e6:.2f}M"
    return f"${value:,.0f}"


def format_change(change: float | None) -> str:
    return f"{change or 0.0:+.2f}%"
