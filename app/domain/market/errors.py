"""
Domain-specific errors for the market bounded context.

Raised by market data adapters and mapped to HTTP responses
at the interface layer. No framework imports allowed.
"""


class MarketDataError(Exception):
    """Base error for all market data failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class UpstreamUnavailableError(MarketDataError):
    """Raised when the price provider fails its liveness probe."""

    def __init__(self, reason: str = "liveness probe failed") -> None:
        super().__init__(f"Price provider unavailable: {reason}")
        self.reason = reason


class UpstreamError(MarketDataError):
    """Raised when the price provider keeps failing after all retries."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Price provider request to {path} failed: {reason}")
        self.path = path
        self.reason = reason


class DecodeError(MarketDataError):
    """Raised when a provider response does not have the expected shape."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not decode response from {path}: {reason}")
        self.path = path
        self.reason = reason


class AssetNotFoundError(MarketDataError):
    """Raised when an asset, or its fiat pairing, is absent from a response."""

    def __init__(self, asset: str, currency: str | None = None) -> None:
        if currency is None:
            message = f"Asset not found: {asset}"
        else:
            message = f"No {currency} price for asset: {asset}"
        super().__init__(message)
        self.asset = asset
        self.currency = currency


class InvalidDateRangeError(MarketDataError):
    """Raised when a historical range starts after it ends."""

    def __init__(self, start: int, end: int) -> None:
        super().__init__(f"Invalid date range: start {start} is after end {end}")
        self.start = start
        self.end = end


class InvalidDateFormatError(MarketDataError):
    """Raised when a date is neither dd-mm-yyyy nor RFC 3339."""

    def __init__(self, raw_value: str) -> None:
        super().__init__(
            f"Invalid date {raw_value!r}: expected dd-mm-yyyy or RFC 3339"
        )
        self.raw_value = raw_value
