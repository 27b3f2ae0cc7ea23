"""
Pydantic schemas for market data API responses.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


class CurrentPriceResponse(BaseModel):
    """Current quote of an asset."""

    asset: str
    currency: str
    price: Decimal


class PricePointItem(BaseModel):
    timestamp: datetime
    price: Decimal


class HistoricalPricesResponse(BaseModel):
    """USD price samples of an asset, in upstream order.

    Attributes:
        asset: Upstream asset identifier.
        start: Range start, seconds since the epoch.
        end: Range end, seconds since the epoch.
        prices: Samples in range; empty when the upstream has none.
    """

    asset: str
    start: int
    end: int
    prices: list[PricePointItem]


class SupportedAssetItem(BaseModel):
    id: str
    symbol: str
    name: str


class SupportedAssetsResponse(BaseModel):
    assets: list[SupportedAssetItem]
