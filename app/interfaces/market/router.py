"""
FastAPI router for market data.

All routes delegate to use cases. No business logic here.
Error mapping is handled by centralized error handlers.
"""

from fastapi import APIRouter, Depends, Path, Query

from app.application.market.dtos import GetCurrentPriceQuery, GetHistoricalPricesQuery
from app.application.market.get_current_price import GetCurrentPriceUseCase
from app.application.market.get_historical_prices import GetHistoricalPricesUseCase
from app.application.market.list_supported_assets import ListSupportedAssetsUseCase
from app.interfaces.market.dates import parse_date_to_unix
from app.interfaces.market.dependencies import (
    get_current_price_use_case,
    get_historical_prices_use_case,
    get_list_supported_assets_use_case,
)
from app.interfaces.market.schemas import (
    CurrentPriceResponse,
    HistoricalPricesResponse,
    PricePointItem,
    SupportedAssetItem,
    SupportedAssetsResponse,
)
from app.interfaces.trading.schemas import ASSET_MAX_LEN, ASSET_PATTERN, ErrorResponse

router = APIRouter(prefix="/market", tags=["market"])

_UPSTREAM_ERRORS = {
    502: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


@router.get(
    "/assets",
    response_model=SupportedAssetsResponse,
    responses=_UPSTREAM_ERRORS,
    summary="List supported assets",
    description="Asset identifiers known to the price provider (cached).",
)
def list_assets(
    use_case: ListSupportedAssetsUseCase = Depends(get_list_supported_assets_use_case),
) -> SupportedAssetsResponse:
    results = use_case.execute()
    return SupportedAssetsResponse(
        assets=[SupportedAssetItem(id=r.id, symbol=r.symbol, name=r.name) for r in results]
    )


@router.get(
    "/{asset}/price",
    response_model=CurrentPriceResponse,
    responses={404: {"model": ErrorResponse}, **_UPSTREAM_ERRORS},
    summary="Get current price",
)
def get_current_price(
    asset: str = Path(..., max_length=ASSET_MAX_LEN, pattern=ASSET_PATTERN),
    currency: str = Query("usd", min_length=2, max_length=10),
    use_case: GetCurrentPriceUseCase = Depends(get_current_price_use_case),
) -> CurrentPriceResponse:
    """Current price of ``asset`` quoted in ``currency``."""
    result = use_case.execute(GetCurrentPriceQuery(asset=asset, currency=currency))
    return CurrentPriceResponse(
        asset=result.asset, currency=result.currency, price=result.price
    )


@router.get(
    "/{asset}/history",
    response_model=HistoricalPricesResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}, **_UPSTREAM_ERRORS},
    summary="Get historical prices",
    description="USD prices between two dates given as dd-mm-yyyy or RFC 3339.",
)
def get_historical_prices(
    asset: str = Path(..., max_length=ASSET_MAX_LEN, pattern=ASSET_PATTERN),
    start: str = Query(..., max_length=40),
    end: str = Query(..., max_length=40),
    use_case: GetHistoricalPricesUseCase = Depends(get_historical_prices_use_case),
) -> HistoricalPricesResponse:
    start_unix = parse_date_to_unix(start)
    end_unix = parse_date_to_unix(end)
    results = use_case.execute(
        GetHistoricalPricesQuery(asset=asset, start_unix=start_unix, end_unix=end_unix)
    )
    return HistoricalPricesResponse(
        asset=asset,
        start=start_unix,
        end=end_unix,
        prices=[PricePointItem(timestamp=r.timestamp, price=r.price) for r in results],
    )
