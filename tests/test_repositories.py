"""
Tests for the SQLAlchemy account, ledger and settlement adapters.

Each test runs against a fresh in-memory SQLite database.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from app.domain.trading.entities import Account, Transaction
from app.domain.trading.errors import (
    ConcurrentUpdateError,
    PersistenceError,
    UsernameTakenError,
)
from app.infrastructure.trading.account_repository import SqlAccountRepository
from app.infrastructure.trading.tables import build_engine, create_schema, transactions
from app.infrastructure.trading.trade_settlement import SqlTradeSettlement
from app.infrastructure.trading.transaction_repository import SqlTransactionRepository


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def accounts(engine) -> SqlAccountRepository:
    return SqlAccountRepository(engine)


@pytest.fixture
def ledger(engine) -> SqlTransactionRepository:
    return SqlTransactionRepository(engine)


def _open(repo: SqlAccountRepository, username: str = "alice") -> Account:
    account = Account.open(username)
    repo.add(account)
    return account


def _ledger_rows(engine) -> int:
    with engine.connect() as conn:
        return conn.execute(select(func.count()).select_from(transactions)).scalar_one()


class TestSqlAccountRepository:
    """Tests for SqlAccountRepository."""

    def test_add_and_load_round_trip(self, accounts) -> None:
        account = _open(accounts)

        loaded = accounts.get_by_id(account.id)

        assert loaded is not None
        assert loaded.username == "alice"
        assert loaded.balance == Decimal("1000.00")
        assert loaded.holdings == {
            "btc": Decimal("0"),
            "sol": Decimal("0"),
            "doge": Decimal("0"),
        }
        assert loaded.version == 0
        assert loaded.created_at.tzinfo is not None

    def test_get_by_username(self, accounts) -> None:
        account = _open(accounts)
        assert accounts.get_by_username("alice").id == account.id
        assert accounts.get_by_username("nobody") is None

    def test_missing_account_returns_none(self, accounts) -> None:
        assert accounts.get_by_id("missing") is None

    def test_duplicate_username_rejected(self, accounts) -> None:
        _open(accounts)
        with pytest.raises(UsernameTakenError):
            _open(accounts)

    def test_save_bumps_version_and_persists(self, accounts) -> None:
        account = _open(accounts)
        account.add_balance(Decimal("0.10"))
        account.adjust_holding("bitcoin", Decimal("0.5"))

        accounts.save(account)

        assert account.version == 1
        loaded = accounts.get_by_id(account.id)
        assert loaded.balance == Decimal("1000.10")
        assert loaded.holdings["bitcoin"] == Decimal("0.5")
        assert loaded.version == 1

    def test_stale_save_raises_conflict(self, accounts) -> None:
        """Two writers loading the same version: the second one loses."""
        account = _open(accounts)
        first = accounts.get_by_id(account.id)
        second = accounts.get_by_id(account.id)

        first.adjust_balance(Decimal("-100"))
        accounts.save(first)

        second.adjust_balance(Decimal("-200"))
        with pytest.raises(ConcurrentUpdateError):
            accounts.save(second)

        assert accounts.get_by_id(account.id).balance == Decimal("900.00")


class TestSqlTransactionRepository:
    """Tests for SqlTransactionRepository."""

    def test_append_and_read_oldest_first(self, accounts, ledger) -> None:
        account = _open(accounts)
        first = Transaction(
            account.id, "bitcoin", Decimal("0.01"), Decimal("50000.0"),
            executed_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        second = Transaction(
            account.id, "solana", Decimal("2"), Decimal("100"),
            executed_at=datetime(2024, 1, 2, tzinfo=timezone.utc),
        )
        ledger.append(second)
        ledger.append(first)

        records = ledger.find_by_account_id(account.id)

        assert [r.id for r in records] == [first.id, second.id]
        assert records[0].quantity == Decimal("0.01")
        assert records[0].price == Decimal("50000.0")
        assert records[0].executed_at.tzinfo is not None

    def test_other_accounts_are_excluded(self, accounts, ledger) -> None:
        alice = _open(accounts, "alice")
        bob = _open(accounts, "bob")
        ledger.append(Transaction(bob.id, "btc", Decimal("1"), Decimal("1")))

        assert ledger.find_by_account_id(alice.id) == []

    def test_duplicate_record_id_is_a_persistence_error(self, accounts, ledger) -> None:
        account = _open(accounts)
        record = Transaction(account.id, "btc", Decimal("1"), Decimal("1"))
        ledger.append(record)

        with pytest.raises(PersistenceError):
            ledger.append(record)


class TestSqlTradeSettlement:
    """Tests for the atomic account + ledger commit."""

    def test_settle_commits_both_writes(self, engine, accounts, ledger) -> None:
        account = _open(accounts)
        account.adjust_balance(Decimal("-500.000"))
        account.adjust_holding("bitcoin", Decimal("0.01"))
        record = Transaction(account.id, "bitcoin", Decimal("0.01"), Decimal("50000.0"))

        SqlTradeSettlement(engine).settle(account, record)

        loaded = accounts.get_by_id(account.id)
        assert loaded.balance == Decimal("500.00")
        assert loaded.holdings["bitcoin"] == Decimal("0.01")
        assert account.version == 1
        assert [r.id for r in ledger.find_by_account_id(account.id)] == [record.id]

    def test_failed_ledger_write_rolls_back_account(self, engine, accounts, ledger) -> None:
        """No ledger row means no balance change either."""
        account = _open(accounts)
        existing = Transaction(account.id, "btc", Decimal("1"), Decimal("1"))
        ledger.append(existing)

        account.adjust_balance(Decimal("-100"))
        with pytest.raises(PersistenceError):
            SqlTradeSettlement(engine).settle(account, existing)

        loaded = accounts.get_by_id(account.id)
        assert loaded.balance == Decimal("1000.00")
        assert loaded.version == 0
        assert _ledger_rows(engine) == 1

    def test_stale_account_writes_nothing(self, engine, accounts) -> None:
        account = _open(accounts)
        stale = accounts.get_by_id(account.id)
        account.add_balance(Decimal("1"))
        accounts.save(account)

        stale.adjust_balance(Decimal("-10"))
        record = Transaction(stale.id, "btc", Decimal("1"), Decimal("10"))
        with pytest.raises(ConcurrentUpdateError):
            SqlTradeSettlement(engine).settle(stale, record)

        assert _ledger_rows(engine) == 0
        assert accounts.get_by_id(account.id).balance == Decimal("1001.00")
