"""SQLAlchemy ORM model definitions."""

from datetime import datetime

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    Integer,
    String,
    UniqueConstraint,
    Index,
)

from walletpulse.repositories.sqlalchemy.database import Base


class WalletTokenHoldingORM(Base):
    """
    Per-wallet cumulative trading totals for one token.

    Written by the transaction ingestion pipeline; this package only reads it.
    """

    __tablename__ = "wallet_token_holdings"
    __table_args__ = (
        UniqueConstraint("wallet_address", "mint", name="uq_wallet_token_holdings_wallet_mint"),
        Index("ix_wallet_token_holdings_mint", "mint"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    wallet_address = Column(String(64), nullable=False)
    mint = Column(String(64), nullable=False)
    group_id = Column(String(64), nullable=True, index=True)
    tokens_bought = Column(Float, nullable=False, default=0.0)
    tokens_sold = Column(Float, nullable=False, default=0.0)
    sol_spent = Column(Float, nullable=False, default=0.0)
    sol_received = Column(Float, nullable=False, default=0.0)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
