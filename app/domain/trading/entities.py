"""
Domain entities for the trading bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID, uuid4

from app.domain.trading.errors import (
    InsufficientFundsError,
    InsufficientHoldingsError,
    InvalidAmountError,
)

logger = logging.getLogger(__name__)

STARTING_BALANCE = Decimal("1000.00")
INITIAL_ASSETS = ("btc", "sol", "doge")
ZERO = Decimal("0")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Account:
    """A simulated trading account.

    The holdings map is a denormalized cache of the ledger; the
    transaction ledger remains the source of truth for holdings.

    Attributes:
        username: Unique login name.
        id: Opaque account identifier.
        balance: USD balance. Never negative.
        holdings: Asset symbol to held quantity.
        version: Optimistic concurrency version, bumped on every save.
        created_at: Creation timestamp (UTC).
    """

    username: str
    id: str = field(default_factory=lambda: str(uuid4()))
    balance: Decimal = STARTING_BALANCE
    holdings: dict[str, Decimal] = field(default_factory=dict)
    version: int = 0
    created_at: Optional[datetime] = None

    @classmethod
    def open(
        cls,
        username: str,
        starting_balance: Decimal = STARTING_BALANCE,
        initial_assets: Iterable[str] = INITIAL_ASSETS,
    ) -> "Account":
        """Create a new account with the starting balance and asset set."""
        if starting_balance < ZERO:
            raise InvalidAmountError(str(starting_balance))
        return cls(
            username=username,
            balance=starting_balance,
            holdings={asset: ZERO for asset in initial_assets},
            created_at=_utcnow(),
        )

    def is_balance_sufficient(self, amount: Decimal) -> bool:
        return self.balance >= amount

    def adjust_balance(self, delta: Decimal) -> None:
        """Apply a signed change to the USD balance.

        Raises:
            InsufficientFundsError: If the balance would go negative.
        """
        if self.balance + delta < ZERO:
            raise InsufficientFundsError(required=str(-delta), available=str(self.balance))
        self.balance += delta
        logger.debug("Balance adjusted for account=%s, new balance=%s", self.id, self.balance)

    def add_balance(self, amount: Decimal) -> None:
        """Deposit a positive USD amount."""
        if amount <= ZERO:
            raise InvalidAmountError(str(amount))
        self.balance += amount

    def adjust_holding(self, asset: str, delta: Decimal) -> None:
        """Apply a signed change to the held quantity of an asset.

        Unknown assets are created on the first positive adjustment.

        Raises:
            InsufficientHoldingsError: If the quantity would go negative.
        """
        current = self.holdings.get(asset, ZERO)
        if current + delta < ZERO:
            raise InsufficientHoldingsError(asset, held=str(current), requested=str(-delta))
        self.holdings[asset] = current + delta

    def holdings_snapshot(self) -> dict[str, Decimal]:
        return dict(self.holdings)


@dataclass(frozen=True)
class Transaction:
    """An immutable ledger record.

    Attributes:
        account_id: Owning account.
        asset: Traded asset symbol.
        quantity: Signed quantity, positive for a buy.
        price: Unit price in USD at execution time.
        id: Unique record identifier, never reused.
        executed_at: Execution timestamp (UTC).
    """

    account_id: str
    asset: str
    quantity: Decimal
    price: Decimal
    id: UUID = field(default_factory=uuid4)
    executed_at: datetime = field(default_factory=_utcnow)

    @property
    def total(self) -> Decimal:
        """USD value of the transaction."""
        return self.price * self.quantity
