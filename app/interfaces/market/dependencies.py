"""
Dependency injection for the market bounded context.
"""

from fastapi import Depends

from app.application.market.get_current_price import GetCurrentPriceUseCase
from app.application.market.get_historical_prices import GetHistoricalPricesUseCase
from app.application.market.list_supported_assets import ListSupportedAssetsUseCase
from app.core.container import ServiceContainer
from app.interfaces.dependencies import get_container


def get_current_price_use_case(
    container: ServiceContainer = Depends(get_container),
) -> GetCurrentPriceUseCase:
    """Build GetCurrentPriceUseCase with the shared price client."""
    return GetCurrentPriceUseCase(market_port=container.market_client)


def get_historical_prices_use_case(
    container: ServiceContainer = Depends(get_container),
) -> GetHistoricalPricesUseCase:
    """Build GetHistoricalPricesUseCase with the shared price client."""
    return GetHistoricalPricesUseCase(market_port=container.market_client)


def get_list_supported_assets_use_case(
    container: ServiceContainer = Depends(get_container),
) -> ListSupportedAssetsUseCase:
    """Build ListSupportedAssetsUseCase with the shared price client."""
    return ListSupportedAssetsUseCase(market_port=container.market_client)
