"""PnL calculator for aggregated wallet holdings."""

import logging
from typing import Iterable, Optional

from walletpulse.domain.models import MarketDataRecord, WalletHolding
from walletpulse.domain.views import PnLResult

logger = logging.getLogger(__name__)


def sold_cost_basis(holding: WalletHolding) -> float:
    """
    Estimate the SOL cost of the tokens a wallet has sold.

    Cost is allocated proportionally: sol_spent * tokens_sold / tokens_bought.
    A holding with no recorded buys contributes nothing; when it still shows
    sells the ledger is inconsistent and the anomaly is logged.
    """
    if holding.tokens_bought > 0:
        return holding.sol_spent * (holding.tokens_sold / holding.tokens_bought)
    if holding.tokens_sold > 0:
        logger.warning(
            f"Holding anomaly: wallet {holding.wallet_address} sold {holding.tokens_sold} "
            f"of {holding.mint} with no recorded buys; sold cost basis treated as 0"
        )
    return 0.0


def compute_token_metrics(
    holdings: Iterable[WalletHolding],
    market: Optional[MarketDataRecord],
) -> PnLResult:
    """
    Compute realized, unrealized and total PnL of one token in native units.

    Formula:
        realized   = Σ sol_received - Σ sold_cost_basis
        unrealized = tokens_held × price_native - (Σ sol_spent - Σ sold_cost_basis)
        total      = realized + unrealized

    Missing market data (or a zero native price) yields an all-zero result.
    """
    if market is None or not market.price_native or market.price_native <= 0:
        return PnLResult.zero()

    total_tokens_held = 0.0
    total_spent = 0.0
    total_received = 0.0
    total_sold_cost = 0.0

    for holding in holdings:
        total_tokens_held += holding.tokens_bought - holding.tokens_sold
        total_spent += holding.sol_spent
        total_received += holding.sol_received
        total_sold_cost += sold_cost_basis(holding)

    current_value = total_tokens_held * market.price_native
    realized = total_received - total_sold_cost
    unrealized = current_value - (total_spent - total_sold_cost)

    return PnLResult(
        total_tokens_held=total_tokens_held,
        total_spent_native=total_spent,
        current_value_native=current_value,
        realized_pnl_native=realized,
        unrealized_pnl_native=unrealized,
        total_pnl_native=realized + unrealized,
    )
