"""
Adapter: Trade settlement.

Implements TradeSettlementPort.
Writes the debited account, its holdings and the ledger record in
one database transaction, so a ledger entry exists if and only if
the matching balance change was committed.
"""

import logging

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.domain.trading.entities import Account, Transaction
from app.domain.trading.errors import PersistenceError
from app.domain.trading.ports import TradeSettlementPort
from app.infrastructure.trading.account_repository import write_account
from app.infrastructure.trading.transaction_repository import insert_transaction
from app.shared.metrics import record_settled_trade

logger = logging.getLogger(__name__)


class SqlTradeSettlement(TradeSettlementPort):
    """Atomic account + ledger commit on a shared SQLAlchemy engine."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def settle(self, account: Account, transaction: Transaction) -> None:
        """Commit the account mutation and its ledger record together.

        Raises:
            ConcurrentUpdateError: If the account version moved on.
            PersistenceError: On any storage failure. Nothing is committed.
        """
        try:
            with self._engine.begin() as conn:
                new_version = write_account(conn, account)
                insert_transaction(conn, transaction)
        except SQLAlchemyError as exc:
            logger.error(
                "Settlement failed for account=%s transaction=%s: %s",
                account.id,
                transaction.id,
                exc,
            )
            raise PersistenceError("could not settle trade") from exc

        account.version = new_version
        record_settled_trade(transaction.asset)
        logger.info(
            "Settled transaction=%s for account=%s (version=%d)",
            transaction.id,
            account.id,
            new_version,
        )
