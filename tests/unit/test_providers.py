"""
Unit tests for upstream providers.

Tests cover:
- DexScreener pair parsing into MarketDataRecord
- DexScreener token endpoint over a mocked transport
- Error mapping to UpstreamUnavailableError
- CoinGecko / DexScreener / Jupiter SOL price sources
- Stub provider shape
"""

import httpx
import pytest

from walletpulse.core.constants import NATIVE_MINT
from walletpulse.core.exceptions import UpstreamUnavailableError
from walletpulse.providers import (
    CoinGeckoPriceSource,
    DexScreenerPriceSource,
    DexScreenerProvider,
    JupiterPriceSource,
    StubMarketDataProvider,
)
from walletpulse.providers.dexscreener_provider import parse_float, record_from_pair

from tests.conftest import BONK_MINT, WIF_MINT, make_pair

BASE_URL = "https://dex.test/latest/dex"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# =============================================================================
# PAIR PARSING TESTS
# =============================================================================


class TestRecordFromPair:
    """Tests for record_from_pair() and number parsing."""

    @pytest.mark.parametrize(
        "raw,expected",
        [("0.25", 0.25), (3, 3.0), (None, 0.0), ("abc", 0.0), ("nan", 0.0), ("inf", 0.0)],
    )
    def test_parse_float(self, raw, expected):
        assert parse_float(raw) == expected

    def test_sol_quoted_pair_uses_price_native(self):
        pair = make_pair(BONK_MINT, price_usd=0.28, price_native=0.0021, liquidity_usd=120_000.0)

        record = record_from_pair(BONK_MINT, pair, native_usd_price=150.0)

        assert record.mint == BONK_MINT
        assert record.price_native == pytest.approx(0.0021)
        assert record.price_usd == pytest.approx(0.28)
        assert record.liquidity_usd == 120_000.0
        assert record.volume_24h_usd == 1_000.0
        assert record.price_change_24h_pct == 2.5
        assert record.pair_id == pair["pairAddress"]
        assert record.venue_id == "raydium"
        assert record.has_price is True

    def test_usdc_quoted_pair_derives_native_from_sol_price(self):
        pair = make_pair(WIF_MINT, price_usd=1.5, price_native=1.5, quote_symbol="USDC")

        record = record_from_pair(WIF_MINT, pair, native_usd_price=150.0)

        assert record.price_native == pytest.approx(0.01)

    def test_usdc_quoted_pair_without_sol_price_has_no_price(self):
        pair = make_pair(WIF_MINT, price_usd=1.5, price_native=1.5, quote_symbol="USDC")

        record = record_from_pair(WIF_MINT, pair)

        assert record.price_native == 0.0
        assert record.price_usd == 0.0
        assert record.has_price is False

    def test_missing_prices_zero_both(self):
        pair = make_pair(BONK_MINT)
        pair["priceUsd"] = None

        record = record_from_pair(BONK_MINT, pair)

        assert record.price_usd == 0.0
        assert record.price_native == 0.0


# =============================================================================
# DEXSCREENER PROVIDER TESTS
# =============================================================================


class TestDexScreenerProvider:
    """Tests for DexScreenerProvider over httpx.MockTransport."""

    @pytest.mark.asyncio
    async def test_returns_pairs_where_mint_is_base_token(self):
        """
        GIVEN a response containing pairs where the mint is base and quote
        WHEN pairs are requested
        THEN only base-token pairs are returned
        """
        seen_urls = []
        base_pair = make_pair(BONK_MINT)
        quote_pair = make_pair(WIF_MINT)
        quote_pair["quoteToken"] = {"address": BONK_MINT, "symbol": "BONK"}

        def handler(request: httpx.Request) -> httpx.Response:
            seen_urls.append(str(request.url))
            return httpx.Response(200, json={"pairs": [base_pair, quote_pair]})

        async with _client(handler) as client:
            provider = DexScreenerProvider(client, base_url=BASE_URL + "/")
            pairs = await provider.get_token_pairs(BONK_MINT)

        assert seen_urls == [f"{BASE_URL}/tokens/{BONK_MINT}"]
        assert pairs == [base_pair]

    @pytest.mark.asyncio
    async def test_null_pairs_is_empty(self):
        async with _client(lambda request: httpx.Response(200, json={"pairs": None})) as client:
            pairs = await DexScreenerProvider(client, base_url=BASE_URL).get_token_pairs(BONK_MINT)

        assert pairs == []

    @pytest.mark.asyncio
    async def test_http_error_raises_upstream_unavailable(self):
        async with _client(lambda request: httpx.Response(503)) as client:
            provider = DexScreenerProvider(client, base_url=BASE_URL)
            with pytest.raises(UpstreamUnavailableError) as exc_info:
                await provider.get_token_pairs(BONK_MINT)

        assert exc_info.value.source == "dexscreener"
        assert "HTTP 503" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_timeout_raises_upstream_unavailable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with _client(handler) as client:
            provider = DexScreenerProvider(client, base_url=BASE_URL, timeout_seconds=0.5)
            with pytest.raises(UpstreamUnavailableError, match="timeout"):
                await provider.get_token_pairs(BONK_MINT)

    @pytest.mark.asyncio
    async def test_invalid_json_raises_upstream_unavailable(self):
        async with _client(lambda request: httpx.Response(200, text="<html>")) as client:
            provider = DexScreenerProvider(client, base_url=BASE_URL)
            with pytest.raises(UpstreamUnavailableError, match="invalid JSON"):
                await provider.get_token_pairs(BONK_MINT)


# =============================================================================
# SOL PRICE SOURCE TESTS
# =============================================================================


class TestPriceSources:
    """Tests for the native price sources."""

    @pytest.mark.asyncio
    async def test_coingecko(self):
        seen_params = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen_params.append(dict(request.url.params))
            return httpx.Response(200, json={"solana": {"usd": 142.31}})

        async with _client(handler) as client:
            price = await CoinGeckoPriceSource(client, "https://cg.test/simple/price").fetch_price()

        assert price == 142.31
        assert seen_params == [{"ids": "solana", "vs_currencies": "usd"}]

    @pytest.mark.asyncio
    async def test_coingecko_missing_price_is_none(self):
        async with _client(lambda request: httpx.Response(200, json={})) as client:
            price = await CoinGeckoPriceSource(client, "https://cg.test/simple/price").fetch_price()

        assert price is None

    @pytest.mark.asyncio
    async def test_jupiter(self):
        body = {"data": {NATIVE_MINT: {"id": NATIVE_MINT, "price": "141.07"}}}

        async with _client(lambda request: httpx.Response(200, json=body)) as client:
            price = await JupiterPriceSource(client, "https://jup.test/price/v2").fetch_price()

        assert price == pytest.approx(141.07)

    @pytest.mark.asyncio
    async def test_jupiter_error_propagates(self):
        async with _client(lambda request: httpx.Response(429)) as client:
            with pytest.raises(UpstreamUnavailableError):
                await JupiterPriceSource(client, "https://jup.test/price/v2").fetch_price()

    @pytest.mark.asyncio
    async def test_dexscreener_uses_deepest_pair(self):
        price = await DexScreenerPriceSource(StubMarketDataProvider()).fetch_price()

        assert price == 150.0

    @pytest.mark.asyncio
    async def test_dexscreener_no_pairs_is_none(self):
        price = await DexScreenerPriceSource(StubMarketDataProvider(pairs={})).fetch_price()

        assert price is None


# =============================================================================
# STUB PROVIDER TESTS
# =============================================================================


class TestStubProvider:
    """Tests for StubMarketDataProvider."""

    @pytest.mark.asyncio
    async def test_known_mint_has_sol_quoted_pairs(self):
        pairs = await StubMarketDataProvider().get_token_pairs(BONK_MINT)

        assert len(pairs) == 2
        assert all(pair["quoteToken"]["address"] == NATIVE_MINT for pair in pairs)
        assert all(pair["baseToken"]["address"] == BONK_MINT for pair in pairs)

    @pytest.mark.asyncio
    async def test_unknown_mint_has_no_pairs(self):
        assert await StubMarketDataProvider().get_token_pairs("Nope") == []
