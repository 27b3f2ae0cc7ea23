"""
Use case: Get the current price of an asset.

Input: GetCurrentPriceQuery (asset, currency)
Output: CurrentPriceResult
Side effects: None (consumes upstream rate-limit slots).
Failure cases: UpstreamUnavailableError, UpstreamError, DecodeError,
    AssetNotFoundError.
"""

import logging

from app.application.market.dtos import CurrentPriceResult, GetCurrentPriceQuery
from app.domain.market.ports import MarketPricePort

logger = logging.getLogger(__name__)


class GetCurrentPriceUseCase:
    def __init__(self, market_port: MarketPricePort) -> None:
        self._market_port = market_port

    def execute(self, query: GetCurrentPriceQuery) -> CurrentPriceResult:
        """Fetch the current quote. Market errors propagate unchanged."""
        asset = query.asset.lower()
        currency = query.currency.lower()
        logger.info("Fetching current price for asset=%s, currency=%s", asset, currency)

        price = self._market_port.get_current_price(asset, currency)
        return CurrentPriceResult(asset=asset, currency=currency, price=price)
