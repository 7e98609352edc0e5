"""Static sample records shown before the first refresh and whenever live data is unavailable."""

from __future__ import annotations

from typing import Tuple

from pricewatch.models import DisplayRecord


def _record(
    coin_id: str,
    name: str,
    symbol: str,
    price: float,
    change: float,
    volume: float,
    market_cap: float,
) -> DisplayRecord:
    return DisplayRecord(
        id=coin_id,
        name=name,
        symbol=symbol,
        current_price=price,
        change_percent_24h=change,
        total_volume=volume,
        market_cap=market_cap,
    )


FALLBACK_RECORDS: Tuple[DisplayRecord, ...] = (
    _record("bitcoin", "Bitcoin", "BTC", 43250.75, 2.34, 28_470_000_000, 847_000_000_000),
    _record("ethereum", "Ethereum", "ETH", 2650.32, -1.23, 15_200_000_000, 318_000_000_000),
    _record("binancecoin", "BNB", "BNB", 315.87, 0.89, 1_840_000_000, 47_200_000_000),
    _record("cardano", "Cardano", "ADA", 0.4823, -3.45, 890_000_000, 16_900_000_000),
    _record("solana", "Solana", "SOL", 98.76, 5.67, 2_340_000_000, 44_100_000_000),
    _record("polkadot", "Polkadot", "DOT", 7.23, 1.45, 450_000_000, 9_500_000_000),
    _record("avalanche-2", "Avalanche", "AVAX", 21.45, -2.34, 320_000_000, 8_200_000_000),
    _record("polygon", "Polygon", "MATIC", 0.89, 3.21, 280_000_000, 8_700_000_000),
    _record("chainlink", "Chainlink", "LINK", 15.67, -1.89, 340_000_000, 9_200_000_000),
    _record("litecoin", "Litecoin", "LTC", 89.34, 2.12, 560_000_000, 6_600_000_000),
    _record("stellar", "Stellar", "XLM", 0.1234, -0.87, 120_000_000, 3_600_000_000),
    _record("uniswap", "Uniswap", "UNI", 6.78, 1.56, 89_000_000, 5_100_000_000),
    _record("algorand", "Algorand", "ALGO", 0.2456, -2.34, 67_000_000, 2_000_000_000),
    _record("cosmos", "Cosmos", "ATOM", 9.87, 0.98, 145_000_000, 3_800_000_000),
    _record("vechain", "VeChain", "VET", 0.0345, 4.23, 78_000_000, 2_500_000_000),
    _record("internet-computer", "Internet Computer", "ICP", 12.34, -3.45, 123_000_000, 5_700_000_000),
    _record("filecoin", "Filecoin", "FIL", 5.67, 2.89, 234_000_000, 2_600_000_000),
    _record("the-graph", "The Graph", "GRT", 0.2345, -1.23, 89_000_000, 2_200_000_000),
    _record("aave", "Aave", "AAVE", 98.76, 1.45, 145_000_000, 1_450_000_000),
    _record("compound", "Compound", "COMP", 67.89, -2.34, 56_000_000, 890_000_000),
)
