"""
Use case: Buy a crypto asset with the account's USD balance.

Input: BuyAssetCommand (account_id, asset, quantity)
Output: BuyResult
Side effects: Debits USD, credits the holding and appends one ledger
    record, all committed in a single settlement.
Failure cases: InvalidAmountError, PriceUnavailableError,
    AccountNotFoundError, InsufficientFundsError, PersistenceError,
    ConcurrentUpdateError.
"""

import logging

from app.application.trading.amounts import parse_positive_amount
from app.application.trading.dtos import BuyAssetCommand, BuyResult
from app.application.trading.mappers import to_transaction_result
from app.domain.market.errors import MarketDataError
from app.domain.market.ports import MarketPricePort
from app.domain.trading.entities import Transaction
from app.domain.trading.errors import (
    AccountNotFoundError,
    ConcurrentUpdateError,
    InsufficientFundsError,
    PriceUnavailableError,
)
from app.domain.trading.ports import AccountRepository, TradeSettlementPort

logger = logging.getLogger(__name__)

QUOTE_CURRENCY = "usd"
DEFAULT_CONFLICT_RETRIES = 3


class BuyAssetUseCase:
    """Orchestrates a simulated market buy.

    The price is fetched once. Account load, funds check, mutation and
    settlement are repeated when another request changed the account in
    between, up to ``conflict_retries`` attempts.
    """

    def __init__(
        self,
        market_port: MarketPricePort,
        account_repo: AccountRepository,
        settlement: TradeSettlementPort,
        conflict_retries: int = DEFAULT_CONFLICT_RETRIES,
    ) -> None:
        self._market_port = market_port
        self._account_repo = account_repo
        self._settlement = settlement
        self._conflict_retries = conflict_retries

    def execute(self, command: BuyAssetCommand) -> BuyResult:
        """Run the buy use case.

        Args:
            command: Account, asset and raw quantity.

        Returns:
            Updated balance, holdings snapshot and the persisted transaction.

        Raises:
            InvalidAmountError: If the quantity is not a positive number.
            PriceUnavailableError: If the current price cannot be fetched.
            AccountNotFoundError: If the account does not exist.
            InsufficientFundsError: If the balance does not cover the cost.
            PersistenceError: If the settlement could not be stored.
            ConcurrentUpdateError: If the account kept changing under us.
        """
        quantity = parse_positive_amount(command.quantity)

        logger.info(
            "Buying asset=%s quantity=%s for account=%s",
            command.asset,
            quantity,
            command.account_id,
        )

        try:
            price = self._market_port.get_current_price(command.asset, QUOTE_CURRENCY)
        except MarketDataError as exc:
            logger.warning("Price lookup for %s failed: %s", command.asset, exc.message)
            raise PriceUnavailableError(command.asset, exc) from exc

        total = price * quantity

        for attempt in range(1, self._conflict_retries + 1):
            account = self._account_repo.get_by_id(command.account_id)
            if account is None:
                raise AccountNotFoundError(command.account_id)

            if not account.is_balance_sufficient(total):
                raise InsufficientFundsError(
                    required=str(total), available=str(account.balance)
                )

            account.adjust_balance(-total)
            account.adjust_holding(command.asset, quantity)
            transaction = Transaction(
                account_id=account.id,
                asset=command.asset,
                quantity=quantity,
                price=price,
            )

            try:
                self._settlement.settle(account, transaction)
            except ConcurrentUpdateError:
                logger.warning(
                    "Account %s changed during buy (attempt %d/%d)",
                    account.id,
                    attempt,
                    self._conflict_retries,
                )
                if attempt == self._conflict_retries:
                    raise
                continue

            return BuyResult(
                balance=account.balance,
                holdings=account.holdings_snapshot(),
                transaction=to_transaction_result(transaction),
            )

        raise ConcurrentUpdateError(command.account_id, -1)
