"""
Data Transfer Objects for the market application layer.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class GetCurrentPriceQuery:
    """Input DTO for a current price lookup.

    Attributes:
        asset: Upstream asset identifier (e.g. "bitcoin").
        currency: Fiat code the price is quoted in.
    """

    asset: str
    currency: str = "usd"


@dataclass(frozen=True)
class CurrentPriceResult:
    asset: str
    currency: str
    price: Decimal


@dataclass(frozen=True)
class GetHistoricalPricesQuery:
    """Input DTO for a historical price range.

    Attributes:
        asset: Upstream asset identifier.
        start_unix: Range start, seconds since the epoch.
        end_unix: Range end, seconds since the epoch.
    """

    asset: str
    start_unix: int
    end_unix: int


@dataclass(frozen=True)
class PricePointResult:
    timestamp: datetime
    price: Decimal


@dataclass(frozen=True)
class SupportedAssetResult:
    id: str
    symbol: str
    name: str
