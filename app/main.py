"""
Application entry point.

Creates the FastAPI application and wires together:
- The service container (database engine, price client, repositories)
- Routers (one per bounded context)
- Error handlers (centralized domain-to-HTTP mapping)
- Security middleware (headers, rate limiting)
- Prometheus metrics at /metrics
- Logging configuration

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.core.config import Settings, settings as default_settings
from app.core.container import ServiceContainer
from app.interfaces.health import router as health_router
from app.interfaces.market.router import router as market_router
from app.interfaces.trading.router import router as trading_router
from app.shared.errors.handlers import register_error_handlers
from app.shared.logging import configure_logging
from app.shared.metrics import build_metrics_app
from app.shared.security.headers import SecurityHeadersMiddleware
from app.shared.security.rate_limiting import build_limiter, rate_limit_exceeded_handler

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: prepare storage on startup, release clients on shutdown."""
    container: ServiceContainer = app.state.container
    container.initialize()
    logger.info("%s started", container.settings.project_name)

    yield

    container.close()


def create_app(
    settings: Settings | None = None,
    container: ServiceContainer | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.

    Args:
        settings: Application settings; the environment-loaded ones by default.
        container: Prebuilt service container (tests inject one backed by
            an in-memory database and a fake price provider).

    Returns:
        A fully configured FastAPI application instance.
    """
    settings = settings or default_settings
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    app.state.container = container or ServiceContainer.from_settings(settings)

    # --- Rate Limiting ---
    app.state.limiter = build_limiter(
        settings.rate_limit_default, enabled=settings.rate_limit_enabled
    )
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(market_router, prefix=API_PREFIX)
    app.include_router(trading_router, prefix=API_PREFIX)

    # --- Metrics ---
    app.mount("/metrics", build_metrics_app())

    return app


app = create_app()
