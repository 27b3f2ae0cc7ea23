"""
Inbound rate limiting.

Uses slowapi to cap requests per client address. Each application
instance gets its own Limiter so limits never leak between apps
(e.g. across test cases). Outbound calls to the price provider are
limited separately by the price client.
"""

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

HTTP_429 = 429


def build_limiter(default_limit: str, enabled: bool = True) -> Limiter:
    """Create a per-client limiter applying ``default_limit`` to every route.

    Args:
        default_limit: slowapi limit string, e.g. "120/minute".
        enabled: Disable to turn every check into a no-op.
    """
    return Limiter(
        key_func=get_remote_address,
        default_limits=[default_limit],
        enabled=enabled,
    )


def rate_limit_exceeded_handler(
    _request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Handle rate limit exceeded errors with a clean JSON response.

    Kept synchronous: SlowAPIMiddleware calls the handler directly.

    Returns:
        A 429 JSON response with a clear error message.
    """
    return JSONResponse(
        status_code=HTTP_429,
        content={"error": "Rate limit exceeded", "detail": str(exc.detail)},
    )
