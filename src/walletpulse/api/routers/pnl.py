"""Token PnL endpoint."""

from fastapi import APIRouter, Depends

from walletpulse.api.deps import (
    check_mint_count,
    get_app_context,
    get_pnl_service,
    require_bearer_token,
)
from walletpulse.app_context import AppContext
from walletpulse.api.schemas.pnl import (
    TokenPnLListResponse,
    TokenPnLRequest,
    TokenPnLResponse,
)
from walletpulse.services import PnLService

router = APIRouter(prefix="/tokens", tags=["pnl"], dependencies=[Depends(require_bearer_token)])


@router.post("/pnl", response_model=TokenPnLListResponse)
async def get_token_pnl(
    data: TokenPnLRequest,
    context: AppContext = Depends(get_app_context),
    pnl_service: PnLService = Depends(get_pnl_service),
):
    """Per-token PnL across the wallets holding each mint."""
    check_mint_count(data.mints, context)
    rows = await pnl_service.get_token_pnl(data.mints, group_id=data.group_id)
    return TokenPnLListResponse(
        success=True,
        pnl_data=[TokenPnLResponse.model_validate(row.to_dict()) for row in rows],
    )
