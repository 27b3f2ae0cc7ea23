"""
Data Transfer Objects for the trading application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID


@dataclass(frozen=True)
class OpenAccountCommand:
    """Input DTO for opening a new account.

    Attributes:
        username: Unique login name.
    """

    username: str


@dataclass(frozen=True)
class AccountResult:
    """Output DTO describing an account."""

    account_id: str
    username: str
    balance: Decimal
    holdings: dict[str, Decimal]
    created_at: datetime | None


@dataclass(frozen=True)
class DepositCommand:
    """Input DTO for adding USD to an account.

    Attributes:
        account_id: Target account.
        amount: Raw amount as entered by the user.
    """

    account_id: str
    amount: str


@dataclass(frozen=True)
class BuyAssetCommand:
    """Input DTO for a simulated buy.

    Attributes:
        account_id: Buying account.
        asset: Upstream asset identifier (e.g. "bitcoin").
        quantity: Raw quantity as entered by the user.
    """

    account_id: str
    asset: str
    quantity: str


@dataclass(frozen=True)
class TransactionResult:
    """Output DTO for a single ledger record."""

    id: UUID
    account_id: str
    asset: str
    quantity: Decimal
    price: Decimal
    executed_at: datetime


@dataclass(frozen=True)
class BuyResult:
    """Output DTO of a successful buy.

    Attributes:
        balance: USD balance after the debit.
        holdings: Holdings snapshot after the credit.
        transaction: The persisted ledger record.
    """

    balance: Decimal
    holdings: dict[str, Decimal]
    transaction: TransactionResult


@dataclass(frozen=True)
class BalanceResult:
    """Output DTO for an account's balance.

    Holdings are summed from the ledger, not read from the account cache.
    """

    account_id: str
    usd_balance: Decimal
    holdings: dict[str, Decimal]


@dataclass(frozen=True)
class ReconcileResult:
    """Output DTO of a holdings reconciliation.

    Attributes:
        account_id: Reconciled account.
        holdings: Holdings after reconciliation.
        corrected: Assets whose cached quantity was rewritten.
    """

    account_id: str
    holdings: dict[str, Decimal]
    corrected: dict[str, Decimal]
