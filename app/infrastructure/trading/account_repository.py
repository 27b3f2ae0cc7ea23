"""
Adapter: Account persistence.

Implements AccountRepository port.
Stores accounts and their cached holdings with SQLAlchemy Core.
Saves are compare-and-swap on the account version so two writers
can never silently overwrite each other.
"""

import logging
from typing import Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.domain.trading.entities import Account
from app.domain.trading.errors import (
    ConcurrentUpdateError,
    PersistenceError,
    UsernameTakenError,
)
from app.domain.trading.ports import AccountRepository
from app.infrastructure.trading.tables import account_holdings, accounts, as_utc

logger = logging.getLogger(__name__)


def load_account(conn: Connection, criterion) -> Optional[Account]:
    """Load one account and its holdings matching ``criterion``."""
    row = conn.execute(select(accounts).where(criterion)).mappings().first()
    if row is None:
        return None

    holdings_rows = conn.execute(
        select(account_holdings.c.asset, account_holdings.c.quantity).where(
            account_holdings.c.account_id == row["id"]
        )
    ).all()

    return Account(
        id=row["id"],
        username=row["username"],
        balance=row["balance"],
        holdings={asset: quantity for asset, quantity in holdings_rows},
        version=row["version"],
        created_at=as_utc(row["created_at"]),
    )


def _write_holdings(conn: Connection, account: Account) -> None:
    conn.execute(
        delete(account_holdings).where(account_holdings.c.account_id == account.id)
    )
    if account.holdings:
        conn.execute(
            insert(account_holdings),
            [
                {"account_id": account.id, "asset": asset, "quantity": quantity}
                for asset, quantity in account.holdings.items()
            ],
        )


def write_account(conn: Connection, account: Account) -> int:
    """Write balance and holdings if the stored version is unchanged.

    Returns:
        The new version number. The caller applies it to the entity
        once the surrounding transaction has committed.

    Raises:
        ConcurrentUpdateError: If no row matched the expected version.
    """
    new_version = account.version + 1
    result = conn.execute(
        update(accounts)
        .where(accounts.c.id == account.id, accounts.c.version == account.version)
        .values(balance=account.balance, version=new_version)
    )
    if result.rowcount != 1:
        raise ConcurrentUpdateError(account.id, account.version)
    _write_holdings(conn, account)
    return new_version


class SqlAccountRepository(AccountRepository):
    """SQLAlchemy implementation of the AccountRepository port."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Return an account by its ID, or None if not found."""
        try:
            with self._engine.connect() as conn:
                return load_account(conn, accounts.c.id == account_id)
        except SQLAlchemyError as exc:
            logger.error("Failed to load account=%s: %s", account_id, exc)
            raise PersistenceError("could not load account") from exc

    def get_by_username(self, username: str) -> Optional[Account]:
        """Return an account by its username, or None if not found."""
        try:
            with self._engine.connect() as conn:
                return load_account(conn, accounts.c.username == username)
        except SQLAlchemyError as exc:
            logger.error("Failed to load account by username: %s", exc)
            raise PersistenceError("could not load account") from exc

    def add(self, account: Account) -> None:
        """Insert a newly opened account with its initial holdings."""
        try:
            with self._engine.begin() as conn:
                taken = conn.execute(
                    select(accounts.c.id).where(accounts.c.username == account.username)
                ).first()
                if taken is not None:
                    raise UsernameTakenError(account.username)
                conn.execute(
                    insert(accounts).values(
                        id=account.id,
                        username=account.username,
                        balance=account.balance,
                        version=account.version,
                        created_at=account.created_at,
                    )
                )
                _write_holdings(conn, account)
        except IntegrityError as exc:
            raise UsernameTakenError(account.username) from exc
        except SQLAlchemyError as exc:
            logger.error("Failed to insert account=%s: %s", account.id, exc)
            raise PersistenceError("could not create account") from exc

        logger.info("Opened account=%s", account.id)

    def save(self, account: Account) -> None:
        """Persist balance and holdings with an optimistic version check."""
        try:
            with self._engine.begin() as conn:
                new_version = write_account(conn, account)
        except SQLAlchemyError as exc:
            logger.error("Failed to save account=%s: %s", account.id, exc)
            raise PersistenceError("could not save account") from exc

        account.version = new_version
        logger.debug("Saved account=%s at version=%d", account.id, new_version)
