"""
Entity-to-DTO mapping shared by the trading use cases.
"""

from app.application.trading.dtos import AccountResult, TransactionResult
from app.domain.trading.entities import Account, Transaction


def to_transaction_result(transaction: Transaction) -> TransactionResult:
    return TransactionResult(
        id=transaction.id,
        account_id=transaction.account_id,
        asset=transaction.asset,
        quantity=transaction.quantity,
        price=transaction.price,
        executed_at=transaction.executed_at,
    )


def to_account_result(account: Account) -> AccountResult:
    return AccountResult(
        account_id=account.id,
        username=account.username,
        balance=account.balance,
        holdings=account.holdings_snapshot(),
        created_at=account.created_at,
    )
