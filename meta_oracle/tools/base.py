"""
Market Data Feeds: Base classes for external price/volume sources.

Signal oracles read market data through a feed. The engine never talks to
the network itself; swapping CoinGecko for another provider (or for a
static feed in tests and offline runs) only means passing another feed.

To add a new feed:
  1. Create a new file in meta_oracle/tools/
  2. Subclass BaseMarketFeed, implement fetch_quotes()
  3. Raise SourceUnavailableError when the provider cannot answer
"""

from abc import ABC, abstractmethod
from typing import Optional

import structlog
from pydantic import BaseModel, Field

from meta_oracle.errors import SourceUnavailableError

logger = structlog.get_logger()


class MarketQuote(BaseModel):
    """Current market snapshot for a single asset."""

    asset: str = Field(..., description="Provider asset id, e.g. bitcoin")
    symbol: str = Field(default="", description="Display symbol, e.g. BTC")
    price: float = Field(default=0.0, ge=0.0)
    change_24h: float = Field(default=0.0, description="24h change in percent")
    volume_24h: float = Field(default=0.0, ge=0.0)
    market_cap: float = Field(default=0.0, ge=0.0)


class BaseMarketFeed(ABC):
    """Abstract base class for all market data feeds."""

    name: str = ""

    @abstractmethod
    async def fetch_quotes(self, assets: list[str]) -> list[MarketQuote]:
        """
        Fetch current quotes for the given assets.

        Raises:
            SourceUnavailableError: If the provider cannot be reached or
                returns unusable data.
        """
        ...

    async def close(self) -> None:
        """Release any held connections."""


class StaticMarketFeed(BaseMarketFeed):
    """
    In-memory feed returning preconfigured quotes.

    Used for offline runs and tests. Setting ``fail`` makes every fetch
    raise SourceUnavailableError, which exercises the fallback path of
    the signal oracles.
    """

    name = "static"

    def __init__(self, quotes: Optional[list[MarketQuote]] = None, fail: bool = False):
        self.quotes = list(quotes or [])
        self.fail = fail
        self.calls = 0

    async def fetch_quotes(self, assets: list[str]) -> list[MarketQuote]:
        self.calls += 1
        if self.fail:
            raise SourceUnavailableError(self.name, "static feed configured to fail")

        wanted = set(assets)
        quotes = [q for q in self.quotes if not wanted or q.asset in wanted]
        logger.debug("Static quotes served", count=len(quotes))
        return quotes
