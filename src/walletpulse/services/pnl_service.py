"""Token PnL service: joins ledger holdings with cached market data."""

import asyncio
import logging
from typing import Iterable, Optional

from walletpulse.domain.views import TokenPnL
from walletpulse.repositories.protocols import HoldingsRepository
from walletpulse.services.market_data_service import MarketDataService
from walletpulse.services.pnl_calculator import compute_token_metrics

logger = logging.getLogger(__name__)


class PnLService:
    """
    Service computing per-token PnL for the dashboard.

    Holdings come from the ledger, prices from MarketDataService; PnL is
    recomputed on every call and never stored.
    """

    def __init__(
        self,
        holdings_repo: HoldingsRepository,
        market_data_service: MarketDataService,
    ):
        self._holdings = holdings_repo
        self._market = market_data_service

    async def get_token_pnl(
        self,
        mints: Iterable[str],
        group_id: Optional[str] = None,
    ) -> list[TokenPnL]:
        """Return one TokenPnL per distinct mint, in request order."""
        unique = list(dict.fromkeys(m for m in mints if m))
        if not unique:
            return []

        holdings = await asyncio.to_thread(self._holdings.list_holdings, unique, group_id)
        market = await self._market.get_batch(unique)

        results = []
        for mint in unique:
            mint_holdings = holdings.get(mint, [])
            record = market.get(mint)
            results.append(
                TokenPnL.build(
                    mint=mint,
                    pnl=compute_token_metrics(mint_holdings, record),
                    market=record,
                    wallet_count=len(mint_holdings),
                )
            )

        logger.debug(f"Computed PnL for {len(results)} tokens (group={group_id})")
        return results
