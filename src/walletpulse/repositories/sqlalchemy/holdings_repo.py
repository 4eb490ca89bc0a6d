"""SQLAlchemy implementation of HoldingsRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from walletpulse.domain.models import WalletHolding
from walletpulse.repositories.sqlalchemy.orm_models import WalletTokenHoldingORM


class SqlAlchemyHoldingsRepository:
    """Read-only SQLAlchemy access to the ledger's holdings table."""

    def __init__(self, db: Session):
        self._db = db

    def list_holdings(
        self,
        mints: list[str],
        group_id: Optional[str] = None,
    ) -> dict[str, list[WalletHolding]]:
        """Get holdings for the given mints, keyed by mint."""
        result: dict[str, list[WalletHolding]] = {mint: [] for mint in mints}
        if not mints:
            return result

        query = self._db.query(WalletTokenHoldingORM).filter(
            WalletTokenHoldingORM.mint.in_(list(result))
        )
        if group_id is not None:
            query = query.filter(WalletTokenHoldingORM.group_id == group_id)

        for orm in query.order_by(WalletTokenHoldingORM.mint, WalletTokenHoldingORM.wallet_address):
            result[orm.mint].append(self._to_domain(orm))
        return result

    @staticmethod
    def _to_domain(orm: WalletTokenHoldingORM) -> WalletHolding:
        """Convert ORM holding to domain model."""
        return WalletHolding(
            wallet_address=orm.wallet_address,
            mint=orm.mint,
            tokens_bought=float(orm.tokens_bought or 0.0),
            tokens_sold=float(orm.tokens_sold or 0.0),
            sol_spent=float(orm.sol_spent or 0.0),
            sol_received=float(orm.sol_received or 0.0),
        )
