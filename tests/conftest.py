"""
Pytest configuration and fixtures for WalletPulse tests.

This module provides:
- In-memory SQLite database fixtures for the holdings table
- Factory helpers for DexScreener-shaped pairs and wallet holdings
- Deterministic and failing market data providers
- Fixed and failing SOL/USD price sources
- Fake API clients for the dashboard-side queue and coalescer
- A FastAPI test client wired to fakes
"""

import asyncio
from typing import Any, Callable, Iterable, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session

from walletpulse.app_context import AppContext, set_app_context
from walletpulse.config.settings import Settings, reset_settings, set_settings
from walletpulse.core.constants import NATIVE_MINT
from walletpulse.core.exceptions import ApiRequestError, UpstreamUnavailableError
from walletpulse.main import app
from walletpulse.repositories.memory import InMemoryCacheStore
from walletpulse.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from walletpulse.repositories.sqlalchemy import orm_models  # noqa: F401
from walletpulse.repositories.sqlalchemy import SqlAlchemyHoldingsRepository
from walletpulse.repositories.sqlalchemy.orm_models import WalletTokenHoldingORM
from walletpulse.services import MarketDataService

BONK_MINT = "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263"
WIF_MINT = "EKpQGSJtjMFqKZ9KQanSqYXRcF8fBopzLHYxdM65zcjm"
UNKNOWN_MINT = "UnknownMint1111111111111111111111111111111"


# =============================================================================
# PAIR HELPERS
# =============================================================================


def make_pair(
    mint: str,
    price_usd: float = 0.3,
    price_native: float = 0.002,
    liquidity_usd: float = 50_000.0,
    dex_id: str = "raydium",
    pair_address: Optional[str] = None,
    quote_symbol: str = "SOL",
) -> dict[str, Any]:
    """Build a DexScreener-shaped pair object with the mint as base token."""
    quote_address = NATIVE_MINT if quote_symbol == "SOL" else f"{quote_symbol}Mint"
    return {
        "chainId": "solana",
        "dexId": dex_id,
        "pairAddress": pair_address or f"{dex_id}-{mint[:6]}",
        "baseToken": {"address": mint},
        "quoteToken": {"address": quote_address, "symbol": quote_symbol},
        "priceUsd": str(price_usd),
        "priceNative": str(price_native),
        "liquidity": {"usd": liquidity_usd},
        "volume": {"h24": 1_000.0},
        "priceChange": {"h24": 2.5},
    }


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class FakeMarketProvider:
    """
    Deterministic market data provider for testing.

    Returns fixed pairs per mint and records every upstream call.
    """

    def __init__(self, pairs: Optional[dict[str, list[dict[str, Any]]]] = None):
        self.pairs = pairs or {}
        self.calls: list[str] = []

    async def get_token_pairs(self, mint: str) -> list[dict[str, Any]]:
        self.calls.append(mint)
        return [dict(pair) for pair in self.pairs.get(mint, [])]


class FailingMarketProvider:
    """Market provider that always raises UpstreamUnavailableError."""

    def __init__(self):
        self.calls: list[str] = []

    async def get_token_pairs(self, mint: str) -> list[dict[str, Any]]:
        self.calls.append(mint)
        raise UpstreamUnavailableError("dexscreener", "HTTP 503")


class FixedPriceSource:
    """SOL/USD price source returning a fixed value (or raising)."""

    def __init__(self, name: str, price: Optional[float] = None, error: Optional[Exception] = None):
        self.name = name
        self._price = price
        self._error = error
        self.calls = 0

    async def fetch_price(self) -> Optional[float]:
        self.calls += 1
        if self._error is not None:
            raise self._error
        return self._price


@pytest.fixture
def fake_provider() -> FakeMarketProvider:
    """Provide a market provider with pairs for BONK and WIF."""
    return FakeMarketProvider(
        {
            BONK_MINT: [
                make_pair(BONK_MINT, price_usd=0.25, price_native=0.0019, liquidity_usd=50_000.0),
                make_pair(BONK_MINT, price_usd=0.28, price_native=0.0021,
                          liquidity_usd=120_000.0, dex_id="orca"),
            ],
            WIF_MINT: [
                make_pair(WIF_MINT, price_usd=1.8, price_native=0.012, liquidity_usd=7_000_000.0),
            ],
        }
    )


@pytest.fixture
def failing_provider() -> FailingMarketProvider:
    """Provide a market provider that always fails."""
    return FailingMarketProvider()


@pytest.fixture
def cache_store() -> InMemoryCacheStore:
    """Provide an empty in-memory cache store."""
    return InMemoryCacheStore()


@pytest.fixture
def market_data_service(fake_provider, cache_store) -> MarketDataService:
    """Provide MarketDataService without pacing delays."""
    return MarketDataService(
        provider=fake_provider,
        cache_store=cache_store,
        cache_ttl_seconds=300,
        min_request_interval_seconds=0,
        chunk_delay_seconds=0,
    )


# =============================================================================
# CLIENT-SIDE FAKES
# =============================================================================


class RecordingPreloadApi:
    """Preload API fake recording each batch; can fail or block on a gate."""

    def __init__(self, fail: bool = False, gate: Optional[asyncio.Event] = None):
        self.batches: list[list[str]] = []
        self._fail = fail
        self._gate = gate

    async def preload_prices(self, mints: Iterable[str]) -> int:
        batch = list(mints)
        self.batches.append(batch)
        if self._gate is not None:
            await self._gate.wait()
        if self._fail:
            raise ApiRequestError("POST /preload-prices returned HTTP 500", status_code=500)
        return len(batch)


class FakePnLApi:
    """
    PnL API fake returning one row per requested mint.

    Each response can be held back on a per-call gate, and the first
    `failures` calls raise ApiRequestError.
    """

    def __init__(self, failures: int = 0, price_native: float = 0.03):
        self.calls: list[list[str]] = []
        self.gates: list[asyncio.Event] = []
        self.hold = False
        self.failures = failures
        self._price_native = price_native

    async def fetch_token_pnl(
        self,
        mints: Iterable[str],
        group_id: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        requested = list(mints)
        self.calls.append(requested)
        if self.hold:
            gate = asyncio.Event()
            self.gates.append(gate)
            await gate.wait()
        if self.failures > 0:
            self.failures -= 1
            raise ApiRequestError("POST /tokens/pnl returned HTTP 503", status_code=503)
        return [pnl_row(mint, price_native=self._price_native, call=len(self.calls)) for mint in requested]


def pnl_row(mint: str, price_native: float = 0.03, call: int = 1) -> dict[str, Any]:
    """A /tokens/pnl row; `call` tags which request produced it."""
    return {
        "mint": mint,
        "has_price": True,
        "wallet_count": 1,
        "price_native": price_native,
        "total_pnl_native": 0.8,
        "call": call,
    }


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def holdings_repo(test_session) -> SqlAlchemyHoldingsRepository:
    """Provide test HoldingsRepository."""
    return SqlAlchemyHoldingsRepository(test_session)


@pytest.fixture
def holding_factory(test_session) -> Callable[..., WalletTokenHoldingORM]:
    """Factory inserting rows into the holdings table."""

    def _create_holding(
        wallet_address: str,
        mint: str,
        tokens_bought: float = 0.0,
        tokens_sold: float = 0.0,
        sol_spent: float = 0.0,
        sol_received: float = 0.0,
        group_id: Optional[str] = None,
    ) -> WalletTokenHoldingORM:
        row = WalletTokenHoldingORM(
            wallet_address=wallet_address,
            mint=mint,
            group_id=group_id,
            tokens_bought=tokens_bought,
            tokens_sold=tokens_sold,
            sol_spent=sol_spent,
            sol_received=sol_received,
        )
        test_session.add(row)
        test_session.commit()
        return row

    return _create_holding


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def app_context(fake_provider) -> AppContext:
    """AppContext wired to fakes: no network, no pacing delays."""
    settings = Settings(
        database_url="sqlite://",
        upstream_min_interval_seconds=0,
        batch_chunk_delay_seconds=0,
    )
    set_settings(settings)
    reset_database()
    context = AppContext(
        settings=settings,
        provider=fake_provider,
        cache_store=InMemoryCacheStore(),
        price_sources=[FixedPriceSource("fixed", price=150.0)],
    )
    set_app_context(context)
    yield context
    set_app_context(None)
    reset_database()
    reset_settings()


@pytest.fixture
def client(test_engine, app_context) -> TestClient:
    """Provide FastAPI test client with test database and a bearer token."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app, headers={"Authorization": "Bearer test-token"}) as c:
        yield c
    app.dependency_overrides.clear()
