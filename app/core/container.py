"""
Service container.

Composition root of the application: builds the database engine,
the upstream price client and the repositories exactly once and
hands them to use cases. Nothing here is a module-level global;
the FastAPI app owns one container on ``app.state``.

Usage:
    # Production
    container = ServiceContainer.from_settings(settings)

    # Testing
    container = ServiceContainer(settings=test_settings, engine=engine,
                                 market_client=fake_market_port)
"""

import logging

from sqlalchemy.engine import Engine

from app.core.config import Settings
from app.domain.market.ports import MarketPricePort
from app.infrastructure.market.coingecko_client import CoinGeckoClient
from app.infrastructure.market.rate_limiter import RequestRateLimiter
from app.infrastructure.trading.account_repository import SqlAccountRepository
from app.infrastructure.trading.tables import build_engine, create_schema
from app.infrastructure.trading.trade_settlement import SqlTradeSettlement
from app.infrastructure.trading.transaction_repository import SqlTransactionRepository

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Owns long-lived infrastructure and the adapters built on top of it.

    Args:
        settings: Application settings.
        engine: SQLAlchemy engine shared by every repository.
        market_client: Price provider adapter shared by every request.
    """

    def __init__(
        self,
        settings: Settings,
        engine: Engine,
        market_client: MarketPricePort,
    ) -> None:
        self.settings = settings
        self.engine = engine
        self.market_client = market_client
        self.account_repo = SqlAccountRepository(engine)
        self.transaction_repo = SqlTransactionRepository(engine)
        self.settlement = SqlTradeSettlement(engine)
        self._initialized = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServiceContainer":
        """Build the production wiring. Performs no IO."""
        rate_limiter = RequestRateLimiter(settings.coingecko_rate_limit_per_minute)
        market_client = CoinGeckoClient(
            base_url=settings.coingecko_base_url,
            rate_limiter=rate_limiter,
            timeout_seconds=settings.coingecko_timeout_seconds,
            max_attempts=settings.coingecko_max_attempts,
            asset_cache_ttl_seconds=settings.coingecko_asset_cache_ttl_seconds,
        )
        return cls(
            settings=settings,
            engine=build_engine(settings.database_url),
            market_client=market_client,
        )

    def initialize(self) -> None:
        """Create the database schema. Idempotent."""
        if self._initialized:
            return
        create_schema(self.engine)
        self._initialized = True
        logger.info("Database schema ready")

    def close(self) -> None:
        """Release the HTTP connection pool and database connections."""
        if isinstance(self.market_client, CoinGeckoClient):
            self.market_client.close()
        self.engine.dispose()
        logger.info("Service container closed")
