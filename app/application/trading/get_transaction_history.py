"""
Use case: List an account's ledger records.

Input: account_id
Output: list[TransactionResult], oldest first
Side effects: None.
Failure cases: AccountNotFoundError, PersistenceError.
"""

import logging

from app.application.trading.dtos import TransactionResult
from app.application.trading.mappers import to_transaction_result
from app.domain.trading.errors import AccountNotFoundError
from app.domain.trading.ports import AccountRepository, TransactionRepository

logger = logging.getLogger(__name__)


class GetTransactionHistoryUseCase:
    def __init__(
        self,
        account_repo: AccountRepository,
        transaction_repo: TransactionRepository,
    ) -> None:
        self._account_repo = account_repo
        self._transaction_repo = transaction_repo

    def execute(self, account_id: str) -> list[TransactionResult]:
        if self._account_repo.get_by_id(account_id) is None:
            raise AccountNotFoundError(account_id)

        records = self._transaction_repo.find_by_account_id(account_id)
        logger.debug("Loaded %d transactions for account=%s", len(records), account_id)
        return [to_transaction_result(record) for record in records]
