"""Dependency injection for FastAPI."""

from typing import Optional

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session

from walletpulse.app_context import AppContext
from walletpulse.core.exceptions import ValidationError
from walletpulse.repositories.sqlalchemy import SqlAlchemyHoldingsRepository
from walletpulse.repositories.sqlalchemy.database import get_db
from walletpulse.services import MarketDataService, PnLService, PriceOracle


def require_bearer_token(authorization: Optional[str] = Header(default=None)) -> str:
    """
    Require an `Authorization: Bearer <token>` header.

    Only presence is checked here; token identity is validated upstream by
    the auth layer in front of the API.
    """
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(
            status_code=401,
            detail="Missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token.strip()


def get_app_context(request: Request) -> AppContext:
    """Provide the AppContext started by the application lifespan."""
    return request.app.state.context


def get_market_data_service(
    context: AppContext = Depends(get_app_context),
) -> MarketDataService:
    """Provide MarketDataService instance."""
    return context.market_data


def get_price_oracle(context: AppContext = Depends(get_app_context)) -> PriceOracle:
    """Provide PriceOracle instance."""
    return context.price_oracle


def get_holdings_repo(db: Session = Depends(get_db)) -> SqlAlchemyHoldingsRepository:
    """Provide HoldingsRepository instance."""
    return SqlAlchemyHoldingsRepository(db)


def get_pnl_service(
    holdings_repo: SqlAlchemyHoldingsRepository = Depends(get_holdings_repo),
    market_data_service: MarketDataService = Depends(get_market_data_service),
) -> PnLService:
    """Provide PnLService instance."""
    return PnLService(
        holdings_repo=holdings_repo,
        market_data_service=market_data_service,
    )


def check_mint_count(mints: list[str], context: AppContext) -> None:
    """Reject requests naming more mints than one call may fan out to."""
    limit = context.settings.max_mints_per_request
    if len(mints) > limit:
        raise ValidationError(f"At most {limit} mints per request, got {len(mints)}")
