"""Price endpoints backed by the shared market data cache."""

from fastapi import APIRouter, BackgroundTasks, Depends

from walletpulse.api.deps import (
    check_mint_count,
    get_app_context,
    get_market_data_service,
    get_price_oracle,
    require_bearer_token,
)
from walletpulse.app_context import AppContext
from walletpulse.api.schemas.prices import (
    MarketDataResponse,
    MintListRequest,
    NativePriceResponse,
    PreloadResponse,
    PriceBatchResponse,
    PriceStatsResponse,
)
from walletpulse.services import MarketDataService, PriceOracle

router = APIRouter(tags=["prices"], dependencies=[Depends(require_bearer_token)])


@router.post("/prices/batch", response_model=PriceBatchResponse)
async def get_price_batch(
    data: MintListRequest,
    context: AppContext = Depends(get_app_context),
    market_data_service: MarketDataService = Depends(get_market_data_service),
):
    """Return cached (or freshly fetched) market data for each mint."""
    check_mint_count(data.mints, context)
    records = await market_data_service.get_batch(data.mints)
    return PriceBatchResponse(
        results={
            mint: MarketDataResponse.model_validate(record.to_dict()) if record else None
            for mint, record in records.items()
        }
    )


@router.post("/preload-prices", response_model=PreloadResponse, status_code=202)
async def preload_prices(
    data: MintListRequest,
    background_tasks: BackgroundTasks,
    context: AppContext = Depends(get_app_context),
    market_data_service: MarketDataService = Depends(get_market_data_service),
):
    """Warm the price cache for the given mints after responding."""
    check_mint_count(data.mints, context)
    mints = list(dict.fromkeys(m for m in data.mints if m))
    if mints:
        background_tasks.add_task(market_data_service.get_batch, mints)
    return PreloadResponse(accepted=len(mints))


@router.get("/prices/native", response_model=NativePriceResponse)
def get_native_price(price_oracle: PriceOracle = Depends(get_price_oracle)):
    """Current SOL/USD price and oracle status."""
    return NativePriceResponse(**price_oracle.get_status())


@router.get("/prices/stats", response_model=PriceStatsResponse)
def get_price_stats(
    market_data_service: MarketDataService = Depends(get_market_data_service),
):
    """Cache and upstream counters since startup."""
    return PriceStatsResponse(**market_data_service.get_stats())
