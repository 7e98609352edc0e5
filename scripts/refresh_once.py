from __future__ import annotations

import asyncio
import logging

from pricewatch.config import settings
from pricewatch.ingestion.pipeline import build_scheduler
from pricewatch.market_stats import format_change, format_compact_usd, format_price, summarize

logging.basicConfig(level=settings.log_level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
logger = logging.getLogger(__name__)


async def main() -> None:
    scheduler = build_scheduler()
    snapshot = await scheduler.refresh()
    await scheduler.stop()

    if snapshot.last_error:
        logger.warning(snapshot.last_error)

    for rank, record in enumerate(snapshot.records, start=1):
        print(
            f"{rank:>3}  {record.name:<20} {record.symbol:<6} {format_price(record.current_price):>14} "
            f"{format_change(record.change_percent_24h):>9} {format_compact_usd(record.market_cap):>10}"
        )

    stats = summarize(snapshot.records)
    print(
        f"\n{stats.total_assets} assets | volume {format_compact_usd(stats.total_volume_24h)} | "
        f"market cap {format_compact_usd(stats.total_market_cap)} | avg change {stats.average_change_24h:.2f}%"
    )


if __name__ == "__main__":
    asyncio.run(main())
