"""
Use case: Add USD to an account.

Input: DepositCommand (account_id, amount)
Output: AccountResult
Side effects: Increases the stored USD balance.
Failure cases: InvalidAmountError, AccountNotFoundError,
    PersistenceError, ConcurrentUpdateError.
"""

import logging

from app.application.trading.amounts import parse_positive_amount
from app.application.trading.dtos import AccountResult, DepositCommand
from app.application.trading.mappers import to_account_result
from app.domain.trading.errors import AccountNotFoundError, ConcurrentUpdateError
from app.domain.trading.ports import AccountRepository

logger = logging.getLogger(__name__)


class DepositUseCase:
    """Credits a positive USD amount with an optimistic version check."""

    def __init__(self, account_repo: AccountRepository, conflict_retries: int = 3) -> None:
        self._account_repo = account_repo
        self._conflict_retries = conflict_retries

    def execute(self, command: DepositCommand) -> AccountResult:
        """Run the deposit use case.

        Raises:
            InvalidAmountError: If the amount is not a positive number.
            AccountNotFoundError: If the account does not exist.
        """
        amount = parse_positive_amount(command.amount)
        logger.info("Depositing %s USD to account=%s", amount, command.account_id)

        for attempt in range(1, self._conflict_retries + 1):
            account = self._account_repo.get_by_id(command.account_id)
            if account is None:
                raise AccountNotFoundError(command.account_id)

            account.add_balance(amount)
            try:
                self._account_repo.save(account)
            except ConcurrentUpdateError:
                if attempt == self._conflict_retries:
                    raise
                logger.warning("Account %s changed during deposit, retrying", account.id)
                continue
            return to_account_result(account)

        raise ConcurrentUpdateError(command.account_id, -1)
