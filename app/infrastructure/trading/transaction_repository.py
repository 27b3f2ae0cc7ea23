"""
Adapter: Transaction ledger.

Implements TransactionRepository port.
Append-only storage of transaction records; no update or delete exists.
"""

import logging
from uuid import UUID

from sqlalchemy import insert, select
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from app.domain.trading.entities import Transaction
from app.domain.trading.errors import PersistenceError
from app.domain.trading.ports import TransactionRepository
from app.infrastructure.trading.tables import as_utc, transactions

logger = logging.getLogger(__name__)


def insert_transaction(conn: Connection, transaction: Transaction) -> None:
    """Insert one ledger record on an open connection."""
    conn.execute(
        insert(transactions).values(
            id=str(transaction.id),
            account_id=transaction.account_id,
            asset=transaction.asset,
            quantity=transaction.quantity,
            price=transaction.price,
            executed_at=transaction.executed_at,
        )
    )


class SqlTransactionRepository(TransactionRepository):
    """SQLAlchemy implementation of the TransactionRepository port."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def append(self, transaction: Transaction) -> None:
        """Append a single record in its own database transaction."""
        try:
            with self._engine.begin() as conn:
                insert_transaction(conn, transaction)
        except SQLAlchemyError as exc:
            logger.error("Failed to append transaction=%s: %s", transaction.id, exc)
            raise PersistenceError("could not append transaction") from exc

    def find_by_account_id(self, account_id: str) -> list[Transaction]:
        """Return all records of an account, oldest first."""
        query = (
            select(transactions)
            .where(transactions.c.account_id == account_id)
            .order_by(transactions.c.executed_at, transactions.c.id)
        )
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(query).mappings().all()
        except SQLAlchemyError as exc:
            logger.error("Failed to read ledger for account=%s: %s", account_id, exc)
            raise PersistenceError("could not read transactions") from exc

        return [
            Transaction(
                id=UUID(row["id"]),
                account_id=row["account_id"],
                asset=row["asset"],
                quantity=row["quantity"],
                price=row["price"],
                executed_at=as_utc(row["executed_at"]),
            )
            for row in rows
        ]
