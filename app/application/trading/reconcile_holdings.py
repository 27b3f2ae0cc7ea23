"""
Use case: Reconcile an account's cached holdings with its ledger.

Input: account_id
Output: ReconcileResult
Side effects: Rewrites the cached holdings when they drifted.
Failure cases: AccountNotFoundError, PersistenceError,
    ConcurrentUpdateError.
"""

import logging

from app.application.trading.dtos import ReconcileResult
from app.domain.trading.errors import AccountNotFoundError
from app.domain.trading.ledger import holdings_drift, holdings_from_ledger
from app.domain.trading.ports import AccountRepository, TransactionRepository

logger = logging.getLogger(__name__)


class ReconcileHoldingsUseCase:
    """Replaces drifted holdings with the sums recorded in the ledger.

    Assets tracked at zero without any ledger entry are kept as-is.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        transaction_repo: TransactionRepository,
    ) -> None:
        self._account_repo = account_repo
        self._transaction_repo = transaction_repo

    def execute(self, account_id: str) -> ReconcileResult:
        account = self._account_repo.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)

        ledger = holdings_from_ledger(self._transaction_repo.find_by_account_id(account_id))
        drift = holdings_drift(account.holdings, ledger)

        if drift:
            logger.warning(
                "Holdings drift on account=%s for assets %s",
                account_id,
                sorted(drift),
            )
            account.holdings.update(drift)
            self._account_repo.save(account)

        return ReconcileResult(
            account_id=account.id,
            holdings=account.holdings_snapshot(),
            corrected=drift,
        )
