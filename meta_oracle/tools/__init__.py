"""
Market data feeds used by signal oracles.

Components:
- BaseMarketFeed: Abstract feed interface
- CoinGeckoFeed: CoinGecko HTTP client
- StaticMarketFeed: In-memory feed for offline runs and tests
"""

from meta_oracle.tools.base import BaseMarketFeed, MarketQuote, StaticMarketFeed
from meta_oracle.tools.coingecko import (
    COINGECKO_BASE,
    SYMBOL_TO_ID,
    CoinGeckoFeed,
    resolve_asset_id,
)

__all__ = [
    "BaseMarketFeed",
    "MarketQuote",
    "StaticMarketFeed",
    "CoinGeckoFeed",
    "COINGECKO_BASE",
    "SYMBOL_TO_ID",
    "resolve_asset_id",
]
