"""
Use case: Get historical USD prices of an asset.

Input: GetHistoricalPricesQuery (asset, start_unix, end_unix)
Output: list[PricePointResult]
Side effects: None (consumes upstream rate-limit slots).
Failure cases: InvalidDateRangeError, UpstreamUnavailableError,
    UpstreamError, DecodeError.
"""

import logging

from app.application.market.dtos import GetHistoricalPricesQuery, PricePointResult
from app.domain.market.errors import InvalidDateRangeError
from app.domain.market.ports import MarketPricePort

logger = logging.getLogger(__name__)


class GetHistoricalPricesUseCase:
    """Validates the range and delegates to the MarketPricePort."""

    def __init__(self, market_port: MarketPricePort) -> None:
        self._market_port = market_port

    def execute(self, query: GetHistoricalPricesQuery) -> list[PricePointResult]:
        """Run the historical prices use case.

        Returns:
            Price samples in upstream order; empty when no data is in range.

        Raises:
            InvalidDateRangeError: If the range starts after it ends.
        """
        if query.start_unix > query.end_unix:
            raise InvalidDateRangeError(query.start_unix, query.end_unix)

        asset = query.asset.lower()
        logger.info(
            "Fetching price history for asset=%s from=%d to=%d",
            asset,
            query.start_unix,
            query.end_unix,
        )

        points = self._market_port.get_historical_prices(
            asset, query.start_unix, query.end_unix
        )
        return [PricePointResult(timestamp=p.timestamp, price=p.price) for p in points]
