"""
Port interfaces (ABCs) for the trading bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from app.domain.trading.entities import Account, Transaction


class AccountRepository(ABC):
    """Port for persisting and retrieving accounts."""

    @abstractmethod
    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Return an account by its ID, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def get_by_username(self, username: str) -> Optional[Account]:
        """Return an account by its username, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def add(self, account: Account) -> None:
        """Persist a newly opened account.

        Raises:
            UsernameTakenError: If the username is already in use.
            PersistenceError: On any storage failure.
        """
        raise NotImplementedError

    @abstractmethod
    def save(self, account: Account) -> None:
        """Persist balance and holdings of an existing account.

        The write only succeeds if the stored version still equals
        ``account.version``; on success the version is incremented.

        Raises:
            ConcurrentUpdateError: If the stored version moved on.
            PersistenceError: On any storage failure.
        """
        raise NotImplementedError


class TransactionRepository(ABC):
    """Port for the append-only transaction ledger."""

    @abstractmethod
    def append(self, transaction: Transaction) -> None:
        """Append a record to the ledger."""
        raise NotImplementedError

    @abstractmethod
    def find_by_account_id(self, account_id: str) -> list[Transaction]:
        """Return all records of an account, oldest first."""
        raise NotImplementedError


class TradeSettlementPort(ABC):
    """Port for committing a trade as a single durable unit."""

    @abstractmethod
    def settle(self, account: Account, transaction: Transaction) -> None:
        """Save the mutated account and append its ledger record atomically.

        Either both writes are committed or neither is.

        Raises:
            ConcurrentUpdateError: If the account version moved on.
            PersistenceError: On any storage failure.
        """
        raise NotImplementedError
