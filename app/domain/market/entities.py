"""
Domain entities for the market bounded context.

Value objects describing prices returned by the upstream price API.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class PricePoint:
    """A single historical price sample."""

    timestamp: datetime
    price: Decimal


@dataclass(frozen=True)
class SupportedAsset:
    """An asset the upstream price API knows about.

    Attributes:
        id: Upstream asset identifier (e.g. "bitcoin").
        symbol: Ticker symbol (e.g. "btc").
        name: Human readable name.
    """

    id: str
    symbol: str
    name: str
