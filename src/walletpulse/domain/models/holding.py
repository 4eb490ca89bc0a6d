"""Wallet holding model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class WalletHolding:
    """
    Aggregated position of one wallet in one token.

    Supplied by the ledger; all amounts are cumulative and non-negative.
    tokens_sold <= tokens_bought is expected but not guaranteed.
    """

    wallet_address: str
    mint: str
    tokens_bought: float = 0.0
    tokens_sold: float = 0.0
    sol_spent: float = 0.0
    sol_received: float = 0.0

    @property
    def tokens_held(self) -> float:
        return self.tokens_bought - self.tokens_sold
