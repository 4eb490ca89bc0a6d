"""SQLAlchemy repository implementations."""

from walletpulse.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    init_db,
    reset_database,
    Base,
)
from walletpulse.repositories.sqlalchemy.holdings_repo import SqlAlchemyHoldingsRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyHoldingsRepository",
]
