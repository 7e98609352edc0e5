from __future__ import annotations

import argparse
import asyncio
import logging

from pricewatch.config import settings
from pricewatch.ingestion.pipeline import RefreshScheduler
from pricewatch.ingestion.sources import default_source
from pricewatch.storage import SnapshotStore

logging.basicConfig(level=settings.log_level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Keep the price snapshot fresh and log every refresh.")
    parser.add_argument(
        "--interval",
        type=float,
        default=settings.refresh_interval_seconds,
        help="Interval in seconds between refreshes (default: %(default)ss).",
    )
    return parser.parse_args()


async def main() -> None:
    args = parse_args()
    scheduler = RefreshScheduler(
        store=SnapshotStore(),
        source=default_source(),
        interval_seconds=args.interval,
        request_timeout_seconds=settings.request_timeout_seconds,
    )
    logger.info("Starting refresh loop with interval %s seconds", args.interval)

    scheduler.start()
    try:
        await asyncio.Event().wait()
    finally:
        await scheduler.stop()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Interrupted")
