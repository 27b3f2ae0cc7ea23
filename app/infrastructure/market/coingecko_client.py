"""
Adapter: CoinGecko price client.

Implements MarketPricePort against a CoinGecko-compatible HTTP JSON API:

    GET {base}/ping
    GET {base}/simple/price?ids={asset}&vs_currencies={fiat}
    GET {base}/coins/{asset}/market_chart/range?vs_currency=usd&from=&to=
    GET {base}/coins/list

Every logical call consumes one slot of the client's rate limiter
and is retried with linear backoff (1s, 2s, 3s) before giving up.
Price and history lookups are gated by a liveness probe.
"""

import logging
import threading
import time
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Optional

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from app.domain.market.entities import PricePoint, SupportedAsset
from app.domain.market.errors import (
    AssetNotFoundError,
    DecodeError,
    MarketDataError,
    UpstreamError,
    UpstreamUnavailableError,
)
from app.domain.market.ports import MarketPricePort
from app.infrastructure.market.rate_limiter import RequestRateLimiter
from app.shared.metrics import record_upstream_attempt

logger = logging.getLogger(__name__)

PING_PATH = "/ping"
SIMPLE_PRICE_PATH = "/simple/price"
MARKET_CHART_RANGE_PATH = "/coins/{asset_id}/market_chart/range"
COINS_LIST_PATH = "/coins/list"
HISTORY_CURRENCY = "usd"

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_ASSET_CACHE_TTL_SECONDS = 24 * 60 * 60


class _MarketChartPayload(BaseModel):
    prices: list[list[Decimal]] = []


class _CoinListing(BaseModel):
    id: str
    symbol: str
    name: str


_SIMPLE_PRICE = TypeAdapter(dict[str, dict[str, Decimal]])
_MARKET_CHART = TypeAdapter(_MarketChartPayload)
_COINS_LIST = TypeAdapter(list[_CoinListing])


class CoinGeckoClient(MarketPricePort):
    """HTTP client for the upstream price API.

    One instance is owned by the service container and shared by all
    request threads; its limiter and asset cache are guarded by locks.

    Args:
        base_url: Upstream base address.
        rate_limiter: Limiter spacing outbound calls.
        timeout_seconds: Per-request HTTP timeout.
        max_attempts: Attempts per logical call.
        asset_cache_ttl_seconds: Lifetime of the supported-asset cache.
        slot_timeout: Optional bound on the wait for a rate-limit slot.
        http_client: Preconfigured httpx client (tests inject a mock transport).
        clock: Monotonic time source used for cache expiry.
        sleep: Sleep function used for retry backoff.
    """

    def __init__(
        self,
        base_url: str,
        rate_limiter: RequestRateLimiter,
        timeout_seconds: float = 5.0,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        asset_cache_ttl_seconds: float = DEFAULT_ASSET_CACHE_TTL_SECONDS,
        slot_timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        self._http = http_client or httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
            headers={"Accept": "application/json"},
        )
        self._rate_limiter = rate_limiter
        self._max_attempts = max_attempts
        self._asset_cache_ttl = asset_cache_ttl_seconds
        self._slot_timeout = slot_timeout
        self._clock = clock
        self._sleep = sleep

        self._cache_lock = threading.Lock()
        self._cached_assets: Optional[list[SupportedAsset]] = None
        self._cache_expires_at = 0.0

    # ------------------------------------------------------------------
    # MarketPricePort
    # ------------------------------------------------------------------

    def check_liveness(self) -> bool:
        """Probe ``/ping``. Never raises."""
        try:
            self._get(PING_PATH)
        except MarketDataError as exc:
            logger.error("Price provider liveness probe failed: %s", exc.message)
            return False
        return True

    def get_current_price(self, asset_id: str, fiat_code: str) -> Decimal:
        """Return the current price of ``asset_id`` in ``fiat_code``."""
        if not self.check_liveness():
            raise UpstreamUnavailableError()

        response = self._get(
            SIMPLE_PRICE_PATH,
            params={"ids": asset_id, "vs_currencies": fiat_code},
        )
        data = self._decode(response, SIMPLE_PRICE_PATH, _SIMPLE_PRICE)

        if asset_id not in data:
            raise AssetNotFoundError(asset_id)
        quotes = data[asset_id]
        if fiat_code not in quotes:
            raise AssetNotFoundError(asset_id, fiat_code)
        return quotes[fiat_code]

    def get_historical_prices(
        self, asset_id: str, start_unix: int, end_unix: int
    ) -> list[PricePoint]:
        """Return USD price samples for ``asset_id`` in the unix range."""
        if not self.check_liveness():
            raise UpstreamUnavailableError()

        path = MARKET_CHART_RANGE_PATH.format(asset_id=asset_id)
        response = self._get(
            path,
            params={
                "vs_currency": HISTORY_CURRENCY,
                "from": str(start_unix),
                "to": str(end_unix),
            },
            endpoint=MARKET_CHART_RANGE_PATH,
        )
        payload = self._decode(response, path, _MARKET_CHART)

        points = []
        for sample in payload.prices:
            if len(sample) != 2:
                continue
            timestamp_ms, price = sample
            try:
                timestamp = datetime.fromtimestamp(float(timestamp_ms) / 1000, tz=timezone.utc)
            except (OverflowError, ValueError, OSError) as exc:
                logger.error("Bad timestamp %s from %s: %s", timestamp_ms, path, exc)
                raise DecodeError(path, type(exc).__name__) from exc
            points.append(PricePoint(timestamp=timestamp, price=price))
        return points

    def list_supported_assets(self) -> list[SupportedAsset]:
        """Return the upstream asset list, served from cache while fresh."""
        with self._cache_lock:
            if self._cached_assets is not None and self._clock() < self._cache_expires_at:
                return list(self._cached_assets)

        response = self._get(COINS_LIST_PATH)
        listings = self._decode(response, COINS_LIST_PATH, _COINS_LIST)
        assets = [
            SupportedAsset(id=item.id, symbol=item.symbol, name=item.name)
            for item in listings
        ]

        with self._cache_lock:
            self._cached_assets = assets
            self._cache_expires_at = self._clock() + self._asset_cache_ttl
        logger.info("Cached %d supported assets", len(assets))
        return list(assets)

    # ------------------------------------------------------------------
    # Extras
    # ------------------------------------------------------------------

    def is_supported_asset(self, asset_id: str) -> bool:
        """Return True if ``asset_id`` appears in the supported-asset list."""
        return any(asset.id == asset_id for asset in self.list_supported_assets())

    def close(self) -> None:
        """Release pooled connections."""
        self._http.close()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _get(
        self,
        path: str,
        params: Optional[dict[str, str]] = None,
        endpoint: Optional[str] = None,
    ) -> httpx.Response:
        """Issue one rate-limited GET with bounded retries.

        Every failed attempt, the last included, is followed by a
        backoff of ``attempt + 1`` seconds.

        Args:
            path: Request path relative to the base URL.
            params: Query parameters.
            endpoint: Metrics label; defaults to ``path``.

        Raises:
            UpstreamUnavailableError: If no rate-limit slot was granted in time.
            UpstreamError: If every attempt failed.
        """
        if not self._rate_limiter.acquire_slot(timeout=self._slot_timeout):
            raise UpstreamUnavailableError("rate limit slot not available")

        last_error = "no attempt made"
        for attempt in range(self._max_attempts):
            try:
                response = self._http.get(path, params=params)
            except httpx.HTTPError as exc:
                last_error = f"{type(exc).__name__}: {exc}"
            else:
                if response.is_success:
                    record_upstream_attempt(endpoint or path, succeeded=True)
                    return response
                last_error = f"HTTP {response.status_code}"

            record_upstream_attempt(endpoint or path, succeeded=False)
            logger.warning(
                "Upstream GET %s attempt %d/%d failed: %s",
                path,
                attempt + 1,
                self._max_attempts,
                last_error,
            )
            self._sleep(attempt + 1)

        logger.error("Upstream GET %s gave up after %d attempts", path, self._max_attempts)
        raise UpstreamError(path, last_error)

    @staticmethod
    def _decode(response: httpx.Response, path: str, adapter: TypeAdapter) -> Any:
        """Parse a JSON body into the shape described by ``adapter``."""
        try:
            return adapter.validate_python(response.json(parse_float=Decimal))
        except (ValueError, ValidationError) as exc:
            logger.error("Unexpected payload from %s: %s", path, exc)
            raise DecodeError(path, type(exc).__name__) from exc
