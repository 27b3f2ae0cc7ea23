"""
Pydantic schemas for account and trading API request/response validation.

These schemas enforce input validation and define the API contract.
Quantities and amounts are accepted as strings (JSON numbers are
converted) and parsed by the use cases, so a non-numeric value is
reported as an invalid amount rather than a schema error.
No business logic belongs here.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

ASSET_PATTERN = r"^[a-z0-9][a-z0-9-]*$"
ASSET_MAX_LEN = 64
USERNAME_PATTERN = r"^[A-Za-z0-9_.-]+$"
AMOUNT_MAX_LEN = 64


def _number_to_str(value: Any) -> Any:
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return str(value)
    return value


class OpenAccountRequest(BaseModel):
    """Request schema for opening an account.

    Attributes:
        username: Unique login name (3-100 chars).
    """

    username: str = Field(
        ..., min_length=3, max_length=100, pattern=USERNAME_PATTERN
    )


class AccountResponse(BaseModel):
    """Response schema describing an account."""

    account_id: str
    username: str
    balance: Decimal
    holdings: dict[str, Decimal]
    created_at: datetime | None = None


class DepositRequest(BaseModel):
    """Request schema for adding USD to an account.

    Attributes:
        amount: Positive USD amount.
    """

    amount: str = Field(..., min_length=1, max_length=AMOUNT_MAX_LEN)

    @field_validator("amount", mode="before")
    @classmethod
    def amount_as_text(cls, value: Any) -> Any:
        return _number_to_str(value)


class BuyRequest(BaseModel):
    """Request schema for a simulated buy.

    Attributes:
        asset: Upstream asset identifier, e.g. "bitcoin".
        quantity: Positive quantity of the asset to buy.
    """

    asset: str = Field(
        ...,
        min_length=1,
        max_length=ASSET_MAX_LEN,
        pattern=ASSET_PATTERN,
        description="Upstream asset identifier",
    )
    quantity: str = Field(..., min_length=1, max_length=AMOUNT_MAX_LEN)

    @field_validator("quantity", mode="before")
    @classmethod
    def quantity_as_text(cls, value: Any) -> Any:
        return _number_to_str(value)


class TransactionItem(BaseModel):
    """A single ledger record in a response."""

    id: UUID
    account_id: str
    asset: str
    quantity: Decimal
    price: Decimal
    executed_at: datetime


class BuyResponse(BaseModel):
    """Response schema for a successful buy."""

    message: str = "Purchase completed"
    balance: Decimal
    holdings: dict[str, Decimal]
    transaction: TransactionItem


class BalanceResponse(BaseModel):
    """Response schema for an account balance.

    Holdings are rebuilt from the transaction ledger.
    """

    account_id: str
    usd_balance: Decimal
    holdings: dict[str, Decimal]


class TransactionHistoryResponse(BaseModel):
    """Response schema for an account's ledger, oldest first."""

    transactions: list[TransactionItem]


class ReconcileResponse(BaseModel):
    """Response schema for a holdings reconciliation."""

    account_id: str
    holdings: dict[str, Decimal]
    corrected: dict[str, Decimal]


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    error: str
    detail: str | None = None
