"""
Tests for market data feeds.
"""

import asyncio

import httpx
import pytest

from meta_oracle.consensus import MetaOracleEngine
from meta_oracle.errors import FailureReason, SourceUnavailableError
from meta_oracle.tools import CoinGeckoFeed, StaticMarketFeed, resolve_asset_id

COINGECKO_PAYLOAD = {
    "bitcoin": {
        "usd": 65000.0,
        "usd_24h_change": 2.5,
        "usd_24h_vol": 3.2e10,
        "usd_market_cap": 1.28e12,
    },
    "ethereum": {
        "usd": 3400.0,
        "usd_24h_change": -1.1,
        "usd_24h_vol": 1.4e10,
    },
}


def make_feed(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CoinGeckoFeed(base_url="https://api.test/v3", client=client)


class TestCoinGeckoFeed:

    def test_parses_quotes(self):
        seen = {}

        def handler(request):
            seen["url"] = request.url
            return httpx.Response(200, json=COINGECKO_PAYLOAD)

        feed = make_feed(handler)
        quotes = asyncio.run(feed.fetch_quotes(["btc", "ethereum"]))

        assert seen["url"].path == "/v3/simple/price"
        assert seen["url"].params["ids"] == "bitcoin,ethereum"
        assert seen["url"].params["include_24hr_vol"] == "true"

        btc, eth = quotes
        assert btc.asset == "bitcoin"
        assert btc.symbol == "BTC"
        assert btc.price == 65000.0
        assert btc.change_24h == 2.5
        assert btc.market_cap == 1.28e12
        assert eth.market_cap == 0.0

    def test_http_error_is_unavailable_source(self):
        feed = make_feed(lambda request: httpx.Response(503, text="down"))

        with pytest.raises(SourceUnavailableError) as exc:
            asyncio.run(feed.fetch_quotes(["bitcoin"]))

        assert exc.value.reason == FailureReason.UNAVAILABLE_SOURCE
        assert exc.value.source == "coingecko"

    def test_transport_error_is_unavailable_source(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        feed = make_feed(handler)

        with pytest.raises(SourceUnavailableError):
            asyncio.run(feed.fetch_quotes(["bitcoin"]))

    def test_invalid_json_is_unavailable_source(self):
        feed = make_feed(lambda request: httpx.Response(200, text="<html>rate limited</html>"))

        with pytest.raises(SourceUnavailableError):
            asyncio.run(feed.fetch_quotes(["bitcoin"]))

    def test_malformed_field_is_unavailable_source(self):
        feed = make_feed(lambda request: httpx.Response(200, json={"bitcoin": {"usd": "n/a"}}))

        with pytest.raises(SourceUnavailableError) as exc:
            asyncio.run(feed.fetch_quotes(["bitcoin"]))

        assert exc.value.reason == FailureReason.UNAVAILABLE_SOURCE

    def test_malformed_quotes_fall_back_in_engine(self):
        feed = make_feed(lambda request: httpx.Response(200, json={"bitcoin": {"usd": "n/a"}}))
        engine = MetaOracleEngine.with_default_oracles(feed=feed)

        result = asyncio.run(engine.run_consensus())

        assert result.abstentions == []
        assert result.signal_count == 2

    def test_symbol_mapping(self):
        assert resolve_asset_id("BTC") == "bitcoin"
        assert resolve_asset_id("doge") == "dogecoin"
        assert resolve_asset_id("chainlink") == "chainlink"


class TestStaticMarketFeed:

    def test_filters_requested_assets(self, quotes):
        feed = StaticMarketFeed(quotes)

        result = asyncio.run(feed.fetch_quotes(["ethereum"]))

        assert [q.asset for q in result] == ["ethereum"]
        assert feed.calls == 1

    def test_configured_failure(self):
        with pytest.raises(SourceUnavailableError):
            asyncio.run(StaticMarketFeed(fail=True).fetch_quotes(["bitcoin"]))
