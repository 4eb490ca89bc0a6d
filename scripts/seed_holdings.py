#!/usr/bin/env python3
"""
Seed the holdings table with sample wallets for offline development.
Pairs with WALLETPULSE_MARKET_DATA_PROVIDER=stub, whose mints it uses.

Usage: from project root:
  python scripts/seed_holdings.py --wallets 5 --group demo
"""

import argparse
import random

from walletpulse.config.logging_config import setup_logging
from walletpulse.core.constants import NATIVE_MINT
from walletpulse.repositories.sqlalchemy.database import get_session_factory, init_db
from walletpulse.repositories.sqlalchemy.orm_models import WalletTokenHoldingORM

# Stub mints with an approximate price in SOL
TOKENS = [
    ("DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263", 0.00000015),  # BONK
    ("EKpQGSJtjMFqKZ9KQanSqYXRcF8fBopzLHYxdM65zcjm", 0.012),       # WIF
]


def _random_wallet(rng: random.Random) -> str:
    alphabet = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
    return "".join(rng.choice(alphabet) for _ in range(44))


def generate_holdings(wallets: int, group_id: str, seed: int) -> list[WalletTokenHoldingORM]:
    """Build buy/sell totals around the stub prices."""
    rng = random.Random(seed)
    rows = []
    for _ in range(wallets):
        wallet = _random_wallet(rng)
        for mint, price_sol in TOKENS:
            if rng.random() < 0.3:
                continue
            sol_spent = round(rng.uniform(0.5, 20.0), 4)
            entry_price = price_sol * rng.uniform(0.6, 1.4)
            tokens_bought = sol_spent / entry_price
            tokens_sold = tokens_bought * rng.choice([0.0, 0.25, 0.5, 1.0])
            exit_price = price_sol * rng.uniform(0.7, 1.6)
            rows.append(
                WalletTokenHoldingORM(
                    wallet_address=wallet,
                    mint=mint,
                    group_id=group_id,
                    tokens_bought=tokens_bought,
                    tokens_sold=tokens_sold,
                    sol_spent=sol_spent,
                    sol_received=round(tokens_sold * exit_price, 6),
                )
            )
    return rows


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--wallets", type=int, default=5)
    parser.add_argument("--group", default="demo")
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    setup_logging()
    init_db()
    rows = generate_holdings(args.wallets, args.group, args.seed)

    session = get_session_factory()()
    try:
        session.add_all(rows)
        session.commit()
    finally:
        session.close()

    print(f"Inserted {len(rows)} holdings for {args.wallets} wallets (group={args.group})")
    print(f"Native mint for price checks: {NATIVE_MINT}")


if __name__ == "__main__":
    main()
