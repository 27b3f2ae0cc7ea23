"""
Dependency injection for the trading bounded context.

Provides FastAPI dependency functions that wire the container's
adapters into use cases via constructor injection.
"""

from fastapi import Depends

from app.application.trading.buy_asset import BuyAssetUseCase
from app.application.trading.deposit import DepositUseCase
from app.application.trading.get_balance import GetBalanceUseCase
from app.application.trading.get_transaction_history import (
    GetTransactionHistoryUseCase,
)
from app.application.trading.open_account import OpenAccountUseCase
from app.application.trading.reconcile_holdings import ReconcileHoldingsUseCase
from app.core.container import ServiceContainer
from app.interfaces.dependencies import get_container


def get_open_account_use_case(
    container: ServiceContainer = Depends(get_container),
) -> OpenAccountUseCase:
    """Build OpenAccountUseCase with its infrastructure dependencies."""
    return OpenAccountUseCase(
        account_repo=container.account_repo,
        starting_balance=container.settings.starting_balance,
        initial_assets=container.settings.initial_assets,
    )


def get_deposit_use_case(
    container: ServiceContainer = Depends(get_container),
) -> DepositUseCase:
    """Build DepositUseCase with its infrastructure dependencies."""
    return DepositUseCase(
        account_repo=container.account_repo,
        conflict_retries=container.settings.buy_conflict_retries,
    )


def get_buy_asset_use_case(
    container: ServiceContainer = Depends(get_container),
) -> BuyAssetUseCase:
    """Build BuyAssetUseCase with its infrastructure dependencies."""
    return BuyAssetUseCase(
        market_port=container.market_client,
        account_repo=container.account_repo,
        settlement=container.settlement,
        conflict_retries=container.settings.buy_conflict_retries,
    )


def get_balance_use_case(
    container: ServiceContainer = Depends(get_container),
) -> GetBalanceUseCase:
    """Build GetBalanceUseCase with its infrastructure dependencies."""
    return GetBalanceUseCase(
        account_repo=container.account_repo,
        transaction_repo=container.transaction_repo,
    )


def get_transaction_history_use_case(
    container: ServiceContainer = Depends(get_container),
) -> GetTransactionHistoryUseCase:
    """Build GetTransactionHistoryUseCase with its infrastructure dependencies."""
    return GetTransactionHistoryUseCase(
        account_repo=container.account_repo,
        transaction_repo=container.transaction_repo,
    )


def get_reconcile_holdings_use_case(
    container: ServiceContainer = Depends(get_container),
) -> ReconcileHoldingsUseCase:
    """Build ReconcileHoldingsUseCase with its infrastructure dependencies."""
    return ReconcileHoldingsUseCase(
        account_repo=container.account_repo,
        transaction_repo=container.transaction_repo,
    )
