"""
CoinGecko Feed: Current price, 24h change, 24h volume and market cap.

Uses the public /simple/price endpoint, no API key required.
"""

from typing import Optional

import httpx
import structlog
from pydantic import ValidationError

from meta_oracle.errors import SourceUnavailableError
from meta_oracle.tools.base import BaseMarketFeed, MarketQuote

logger = structlog.get_logger()

COINGECKO_BASE = "https://api.coingecko.com/api/v3"

# Short symbol -> CoinGecko coin id
SYMBOL_TO_ID = {
    "btc": "bitcoin",
    "eth": "ethereum",
    "ada": "cardano",
    "sol": "solana",
    "bnb": "binancecoin",
    "xrp": "ripple",
    "dot": "polkadot",
    "doge": "dogecoin",
}

_ID_TO_SYMBOL = {v: k.upper() for k, v in SYMBOL_TO_ID.items()}


def resolve_asset_id(symbol: str) -> str:
    """Map a short symbol (``btc``) to a CoinGecko id; ids pass through."""
    key = symbol.strip().lower()
    return SYMBOL_TO_ID.get(key, key)


def display_symbol(asset_id: str) -> str:
    return _ID_TO_SYMBOL.get(asset_id, asset_id[:1].upper() + asset_id[1:])


class CoinGeckoFeed(BaseMarketFeed):
    """CoinGecko market data client."""

    name = "coingecko"

    def __init__(
        self,
        base_url: str = COINGECKO_BASE,
        timeout_seconds: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.AsyncClient(
            timeout=timeout_seconds,
            headers={"User-Agent": "meta-oracle/0.1"},
        )

    async def fetch_quotes(self, assets: list[str]) -> list[MarketQuote]:
        ids = [resolve_asset_id(a) for a in assets]
        params = {
            "ids": ",".join(ids),
            "vs_currencies": "usd",
            "include_24hr_change": "true",
            "include_24hr_vol": "true",
            "include_market_cap": "true",
        }

        try:
            response = await self.client.get(f"{self.base_url}/simple/price", params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            logger.warning("CoinGecko request failed", error=str(e))
            raise SourceUnavailableError(self.name, str(e)) from e
        except ValueError as e:
            logger.warning("CoinGecko returned invalid JSON", error=str(e))
            raise SourceUnavailableError(self.name, "invalid JSON response") from e

        if not isinstance(data, dict):
            raise SourceUnavailableError(self.name, f"unexpected payload type {type(data).__name__}")

        try:
            quotes = [
                MarketQuote(
                    asset=coin_id,
                    symbol=display_symbol(coin_id),
                    price=info.get("usd") or 0.0,
                    change_24h=info.get("usd_24h_change") or 0.0,
                    volume_24h=info.get("usd_24h_vol") or 0.0,
                    market_cap=info.get("usd_market_cap") or 0.0,
                )
                for coin_id, info in data.items()
                if isinstance(info, dict)
            ]
        except ValidationError as e:
            logger.warning("CoinGecko returned malformed quotes", error=str(e))
            raise SourceUnavailableError(self.name, "malformed quote fields") from e

        logger.info("CoinGecko quotes fetched", requested=len(ids), received=len(quotes))
        return quotes

    async def close(self) -> None:
        await self.client.aclose()
