"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to HTTP responses.
No stack traces or internal details are exposed to clients.
Internal causes (transport and decode errors) are logged only.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.domain.market.errors import (
    AssetNotFoundError,
    DecodeError,
    InvalidDateFormatError,
    InvalidDateRangeError,
    MarketDataError,
    UpstreamError,
    UpstreamUnavailableError,
)
from app.domain.trading.errors import (
    AccountNotFoundError,
    ConcurrentUpdateError,
    InsufficientFundsError,
    InsufficientHoldingsError,
    InvalidAmountError,
    PersistenceError,
    PriceUnavailableError,
    TradingDomainError,
    UsernameTakenError,
)

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_404 = 404
HTTP_409 = 409
HTTP_422 = 422
HTTP_500 = 500
HTTP_502 = 502
HTTP_503 = 503


def _error_response(status_code: int, error: str) -> JSONResponse:
    """Build a consistent JSON error response."""
    return JSONResponse(status_code=status_code, content={"error": error})


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(InvalidAmountError)
    async def handle_invalid_amount(
        _request: Request, exc: InvalidAmountError
    ) -> JSONResponse:
        logger.warning("Invalid amount: %r", exc.raw_value)
        return _error_response(HTTP_400, "Invalid amount")

    @app.exception_handler(InsufficientFundsError)
    async def handle_insufficient_funds(
        _request: Request, exc: InsufficientFundsError
    ) -> JSONResponse:
        logger.warning("Insufficient funds: required=%s available=%s", exc.required, exc.available)
        return _error_response(HTTP_400, "Insufficient funds")

    @app.exception_handler(InsufficientHoldingsError)
    async def handle_insufficient_holdings(
        _request: Request, exc: InsufficientHoldingsError
    ) -> JSONResponse:
        logger.warning("Insufficient holdings of %s", exc.asset)
        return _error_response(HTTP_400, "Insufficient holdings")

    @app.exception_handler(AccountNotFoundError)
    async def handle_account_not_found(
        _request: Request, exc: AccountNotFoundError
    ) -> JSONResponse:
        logger.warning("Account not found: %s", exc.account_id)
        return _error_response(HTTP_404, "Account not found")

    @app.exception_handler(UsernameTakenError)
    async def handle_username_taken(
        _request: Request, exc: UsernameTakenError
    ) -> JSONResponse:
        logger.warning("Username already taken")
        return _error_response(HTTP_409, "Username already taken")

    @app.exception_handler(ConcurrentUpdateError)
    async def handle_concurrent_update(
        _request: Request, exc: ConcurrentUpdateError
    ) -> JSONResponse:
        logger.warning("Concurrent update on account %s", exc.account_id)
        return _error_response(HTTP_409, "Account was modified concurrently, please retry")

    @app.exception_handler(PriceUnavailableError)
    async def handle_price_unavailable(
        _request: Request, exc: PriceUnavailableError
    ) -> JSONResponse:
        logger.error("Price unavailable for %s: %s", exc.asset, exc.cause)
        return _error_response(HTTP_502, "Current price unavailable")

    @app.exception_handler(PersistenceError)
    async def handle_persistence(
        _request: Request, exc: PersistenceError
    ) -> JSONResponse:
        logger.error("Persistence error: %s", exc.reason)
        return _error_response(HTTP_500, "Could not store changes")

    @app.exception_handler(TradingDomainError)
    async def handle_trading_domain(
        _request: Request, exc: TradingDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled trading domain errors."""
        logger.error("Unhandled trading domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(InvalidDateFormatError)
    async def handle_invalid_date_format(
        _request: Request, exc: InvalidDateFormatError
    ) -> JSONResponse:
        logger.warning("Invalid date format: %r", exc.raw_value)
        return _error_response(HTTP_400, "Dates must be dd-mm-yyyy or RFC 3339")

    @app.exception_handler(InvalidDateRangeError)
    async def handle_invalid_date_range(
        _request: Request, exc: InvalidDateRangeError
    ) -> JSONResponse:
        logger.warning("Invalid date range: %d > %d", exc.start, exc.end)
        return _error_response(HTTP_422, "Start date must not be after end date")

    @app.exception_handler(AssetNotFoundError)
    async def handle_asset_not_found(
        _request: Request, exc: AssetNotFoundError
    ) -> JSONResponse:
        logger.warning("Asset not found: %s (%s)", exc.asset, exc.currency)
        return _error_response(HTTP_404, "Asset not found")

    @app.exception_handler(UpstreamUnavailableError)
    async def handle_upstream_unavailable(
        _request: Request, exc: UpstreamUnavailableError
    ) -> JSONResponse:
        logger.error("Price provider unavailable: %s", exc.reason)
        return _error_response(HTTP_503, "Price provider unavailable")

    @app.exception_handler(UpstreamError)
    async def handle_upstream(
        _request: Request, exc: UpstreamError
    ) -> JSONResponse:
        logger.error("Price provider error on %s: %s", exc.path, exc.reason)
        return _error_response(HTTP_502, "Price provider error")

    @app.exception_handler(DecodeError)
    async def handle_decode(
        _request: Request, exc: DecodeError
    ) -> JSONResponse:
        logger.error("Undecodable price provider response on %s: %s", exc.path, exc.reason)
        return _error_response(HTTP_502, "Invalid response from price provider")

    @app.exception_handler(MarketDataError)
    async def handle_market_data(
        _request: Request, exc: MarketDataError
    ) -> JSONResponse:
        """Catch-all for unhandled market data errors."""
        logger.error("Unhandled market data error: %s", exc.message)
        return _error_response(HTTP_502, "Price provider error")

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
