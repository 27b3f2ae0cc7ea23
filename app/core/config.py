"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here; modules never read the environment directly.
"""

from decimal import Decimal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        rate_limit_default: Inbound rate limit applied to every endpoint.
        rate_limit_enabled: Toggle inbound rate limiting.
        database_url: SQLAlchemy URL for accounts and the ledger.
        coingecko_base_url: Base address of the upstream price API.
        coingecko_timeout_seconds: Per-request HTTP timeout.
        coingecko_rate_limit_per_minute: Outbound request quota.
        coingecko_max_attempts: Attempts per upstream call before giving up.
        coingecko_asset_cache_ttl_seconds: Lifetime of the supported-asset cache.
        starting_balance: USD balance of a newly opened account.
        initial_assets: Assets tracked at zero on a newly opened account.
        buy_conflict_retries: Attempts when an account changes mid-trade.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "CryptoSim"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    rate_limit_default: str = "120/minute"
    rate_limit_enabled: bool = True

    database_url: str = "sqlite:///./cryptosim.db"

    coingecko_base_url: str = "https://api.coingecko.com/api/v3"
    coingecko_timeout_seconds: float = Field(default=5.0, gt=0)
    coingecko_rate_limit_per_minute: int = Field(default=50, gt=0)
    coingecko_max_attempts: int = Field(default=3, ge=1)
    coingecko_asset_cache_ttl_seconds: int = Field(default=86_400, ge=0)

    starting_balance: Decimal = Decimal("1000.00")
    initial_assets: list[str] = ["btc", "sol", "doge"]
    buy_conflict_retries: int = Field(default=3, ge=1)


settings = Settings()
