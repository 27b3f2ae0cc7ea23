"""
Port interfaces (ABCs) for the market bounded context.

The trading context depends on MarketPricePort only; the
concrete HTTP adapter lives in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from decimal import Decimal

from app.domain.market.entities import PricePoint, SupportedAsset


class MarketPricePort(ABC):
    """Port for reading prices from the upstream price provider."""

    @abstractmethod
    def get_current_price(self, asset_id: str, fiat_code: str) -> Decimal:
        """Return the current price of an asset in the given fiat currency.

        Raises:
            UpstreamUnavailableError: If the liveness probe fails.
            UpstreamError: If the provider keeps answering with errors.
            DecodeError: If the response body has an unexpected shape.
            AssetNotFoundError: If the asset or fiat pair is missing.
        """
        raise NotImplementedError

    @abstractmethod
    def get_historical_prices(
        self, asset_id: str, start_unix: int, end_unix: int
    ) -> list[PricePoint]:
        """Return USD price samples between two unix timestamps.

        An empty list is returned when the provider has no data in range.
        """
        raise NotImplementedError

    @abstractmethod
    def check_liveness(self) -> bool:
        """Probe the provider. Never raises; returns False on any failure."""
        raise NotImplementedError

    @abstractmethod
    def list_supported_assets(self) -> list[SupportedAsset]:
        """Return the assets the provider can price."""
        raise NotImplementedError
