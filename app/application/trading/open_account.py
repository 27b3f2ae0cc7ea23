"""
Use case: Open a simulated trading account.

Input: OpenAccountCommand (username)
Output: AccountResult
Side effects: Persists a new account with the starting balance.
Failure cases: UsernameTakenError, PersistenceError.
"""

import logging
from decimal import Decimal
from typing import Iterable

from app.application.trading.dtos import AccountResult, OpenAccountCommand
from app.application.trading.mappers import to_account_result
from app.domain.trading.entities import INITIAL_ASSETS, STARTING_BALANCE, Account
from app.domain.trading.ports import AccountRepository

logger = logging.getLogger(__name__)


class OpenAccountUseCase:
    """Creates accounts with a fixed starting balance and asset set."""

    def __init__(
        self,
        account_repo: AccountRepository,
        starting_balance: Decimal = STARTING_BALANCE,
        initial_assets: Iterable[str] = INITIAL_ASSETS,
    ) -> None:
        self._account_repo = account_repo
        self._starting_balance = starting_balance
        self._initial_assets = tuple(initial_assets)

    def execute(self, command: OpenAccountCommand) -> AccountResult:
        """Open an account for ``command.username``.

        Raises:
            UsernameTakenError: If the username is already in use.
        """
        account = Account.open(
            username=command.username,
            starting_balance=self._starting_balance,
            initial_assets=self._initial_assets,
        )
        self._account_repo.add(account)
        logger.info("Opened account=%s with balance=%s", account.id, account.balance)
        return to_account_result(account)
