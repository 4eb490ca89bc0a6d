"""Holdings repository protocol."""

from typing import Optional, Protocol

from walletpulse.domain.models import WalletHolding


class HoldingsRepository(Protocol):
    """Read access to per-wallet token holdings aggregated by the ledger."""

    def list_holdings(
        self,
        mints: list[str],
        group_id: Optional[str] = None,
    ) -> dict[str, list[WalletHolding]]:
        """
        Get holdings for the given mints, keyed by mint.

        Mints nobody holds map to an empty list. When group_id is given only
        wallets of that monitoring group are included.
        """
        ...
