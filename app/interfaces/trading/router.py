"""
FastAPI router for accounts and simulated trading.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
"""

from fastapi import APIRouter, Depends, status

from app.application.trading.buy_asset import BuyAssetUseCase
from app.application.trading.deposit import DepositUseCase
from app.application.trading.dtos import (
    AccountResult,
    BuyAssetCommand,
    DepositCommand,
    OpenAccountCommand,
    TransactionResult,
)
from app.application.trading.get_balance import GetBalanceUseCase
from app.application.trading.get_transaction_history import (
    GetTransactionHistoryUseCase,
)
from app.application.trading.open_account import OpenAccountUseCase
from app.application.trading.reconcile_holdings import ReconcileHoldingsUseCase
from app.interfaces.trading.dependencies import (
    get_balance_use_case,
    get_buy_asset_use_case,
    get_deposit_use_case,
    get_open_account_use_case,
    get_reconcile_holdings_use_case,
    get_transaction_history_use_case,
)
from app.interfaces.trading.schemas import (
    AccountResponse,
    BalanceResponse,
    BuyRequest,
    BuyResponse,
    DepositRequest,
    ErrorResponse,
    OpenAccountRequest,
    ReconcileResponse,
    TransactionHistoryResponse,
    TransactionItem,
)

router = APIRouter(prefix="/accounts", tags=["accounts"])


def _account_response(result: AccountResult) -> AccountResponse:
    return AccountResponse(
        account_id=result.account_id,
        username=result.username,
        balance=result.balance,
        holdings=result.holdings,
        created_at=result.created_at,
    )


def _transaction_item(result: TransactionResult) -> TransactionItem:
    return TransactionItem(
        id=result.id,
        account_id=result.account_id,
        asset=result.asset,
        quantity=result.quantity,
        price=result.price,
        executed_at=result.executed_at,
    )


@router.post(
    "",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
    summary="Open an account",
    description="Create an account with the starting USD balance and zeroed holdings.",
)
def open_account(
    request: OpenAccountRequest,
    use_case: OpenAccountUseCase = Depends(get_open_account_use_case),
) -> AccountResponse:
    """Open a new simulated trading account."""
    result = use_case.execute(OpenAccountCommand(username=request.username))
    return _account_response(result)


@router.get(
    "/{account_id}/balance",
    response_model=BalanceResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get account balance",
    description="USD balance and holdings summed from the transaction ledger.",
)
def get_balance(
    account_id: str,
    use_case: GetBalanceUseCase = Depends(get_balance_use_case),
) -> BalanceResponse:
    result = use_case.execute(account_id)
    return BalanceResponse(
        account_id=result.account_id,
        usd_balance=result.usd_balance,
        holdings=result.holdings,
    )


@router.post(
    "/{account_id}/deposits",
    response_model=AccountResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Deposit USD",
)
def deposit(
    account_id: str,
    request: DepositRequest,
    use_case: DepositUseCase = Depends(get_deposit_use_case),
) -> AccountResponse:
    """Add USD to an account."""
    command = DepositCommand(account_id=account_id, amount=request.amount)
    return _account_response(use_case.execute(command))


@router.post(
    "/{account_id}/buy",
    response_model=BuyResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    summary="Buy an asset",
    description="Buy a quantity of an asset at the current USD market price.",
)
def buy_asset(
    account_id: str,
    request: BuyRequest,
    use_case: BuyAssetUseCase = Depends(get_buy_asset_use_case),
) -> BuyResponse:
    """Execute a simulated market buy."""
    command = BuyAssetCommand(
        account_id=account_id,
        asset=request.asset,
        quantity=request.quantity,
    )
    result = use_case.execute(command)
    return BuyResponse(
        balance=result.balance,
        holdings=result.holdings,
        transaction=_transaction_item(result.transaction),
    )


@router.get(
    "/{account_id}/transactions",
    response_model=TransactionHistoryResponse,
    responses={404: {"model": ErrorResponse}},
    summary="List transactions",
    description="All ledger records of the account, oldest first.",
)
def get_transactions(
    account_id: str,
    use_case: GetTransactionHistoryUseCase = Depends(get_transaction_history_use_case),
) -> TransactionHistoryResponse:
    results = use_case.execute(account_id)
    return TransactionHistoryResponse(
        transactions=[_transaction_item(r) for r in results]
    )


@router.post(
    "/{account_id}/reconcile",
    response_model=ReconcileResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Reconcile holdings",
    description="Rewrite cached holdings that drifted from the ledger.",
)
def reconcile_holdings(
    account_id: str,
    use_case: ReconcileHoldingsUseCase = Depends(get_reconcile_holdings_use_case),
) -> ReconcileResponse:
    result = use_case.execute(account_id)
    return ReconcileResponse(
        account_id=result.account_id,
        holdings=result.holdings,
        corrected=result.corrected,
    )
