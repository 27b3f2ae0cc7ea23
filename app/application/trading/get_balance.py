"""
Use case: Read an account's balance.

Input: account_id
Output: BalanceResult
Side effects: None.
Failure cases: AccountNotFoundError, PersistenceError.
"""

import logging

from app.application.trading.dtos import BalanceResult
from app.domain.trading.errors import AccountNotFoundError
from app.domain.trading.ledger import holdings_from_ledger
from app.domain.trading.ports import AccountRepository, TransactionRepository

logger = logging.getLogger(__name__)


class GetBalanceUseCase:
    """Returns the USD balance and holdings rebuilt from the ledger."""

    def __init__(
        self,
        account_repo: AccountRepository,
        transaction_repo: TransactionRepository,
    ) -> None:
        self._account_repo = account_repo
        self._transaction_repo = transaction_repo

    def execute(self, account_id: str) -> BalanceResult:
        account = self._account_repo.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)

        ledger = self._transaction_repo.find_by_account_id(account_id)
        return BalanceResult(
            account_id=account.id,
            usd_balance=account.balance,
            holdings=holdings_from_ledger(ledger),
        )
