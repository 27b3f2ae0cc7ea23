"""
Use case: List assets the price provider supports.

Output: list[SupportedAssetResult]
Side effects: None. Served from the client's cache while fresh.
Failure cases: UpstreamError, DecodeError.
"""

from app.application.market.dtos import SupportedAssetResult
from app.domain.market.ports import MarketPricePort


class ListSupportedAssetsUseCase:
    def __init__(self, market_port: MarketPricePort) -> None:
        self._market_port = market_port

    def execute(self) -> list[SupportedAssetResult]:
        return [
            SupportedAssetResult(id=a.id, symbol=a.symbol, name=a.name)
            for a in self._market_port.list_supported_assets()
        ]
