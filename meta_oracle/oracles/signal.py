"""
Signal oracles - observe market data through a feed.

When the feed is unavailable each oracle emits one low-confidence fallback
signal instead of failing the signal phase.
"""

from typing import Optional

import structlog

from meta_oracle.canonical import calculate_sha256
from meta_oracle.errors import SourceUnavailableError
from meta_oracle.models import Signal
from meta_oracle.oracles.base import SignalBehavior
from meta_oracle.tools.base import BaseMarketFeed

logger = structlog.get_logger()

DEFAULT_ASSETS = ["bitcoin", "ethereum"]


class PriceSignal(SignalBehavior):
    """Price and 24h change per asset."""

    default_id = "price-signal"
    confidence = 0.9
    fallback_confidence = 0.3

    def __init__(self, feed: BaseMarketFeed, assets: Optional[list[str]] = None):
        self.feed = feed
        self.assets = list(assets or DEFAULT_ASSETS)

    async def observe(self) -> list[Signal]:
        try:
            quotes = await self.feed.fetch_quotes(self.assets)
        except SourceUnavailableError as e:
            logger.warning("Price feed unavailable, emitting fallback", feed=self.feed.name, error=str(e))
            return [
                Signal.create(
                    source="fallback",
                    confidence=self.fallback_confidence,
                    payload={"price": 0, "change": 0},
                    hash=calculate_sha256("fallback"),
                )
            ]

        return [
            Signal.create(
                source=self.feed.name,
                confidence=self.confidence,
                payload={"asset": q.asset, "price": q.price, "change": q.change_24h},
            )
            for q in quotes
        ]


class VolumeSignal(SignalBehavior):
    """24h traded volume per asset."""

    default_id = "volume-signal"
    confidence = 0.85
    fallback_confidence = 0.2

    def __init__(self, feed: BaseMarketFeed, assets: Optional[list[str]] = None):
        self.feed = feed
        self.assets = list(assets or DEFAULT_ASSETS)

    async def observe(self) -> list[Signal]:
        try:
            quotes = await self.feed.fetch_quotes(self.assets)
        except SourceUnavailableError as e:
            logger.warning("Volume feed unavailable, emitting fallback", feed=self.feed.name, error=str(e))
            return [
                Signal.create(
                    source="volume-fallback",
                    confidence=self.fallback_confidence,
                    payload={"volume": 0},
                    hash=calculate_sha256("volume-fallback"),
                )
            ]

        return [
            Signal.create(
                source=f"{self.feed.name}-volume",
                confidence=self.confidence,
                payload={"asset": q.asset, "volume": q.volume_24h},
            )
            for q in quotes
        ]
