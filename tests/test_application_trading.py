"""
Tests for the trading application layer (use cases).

Tests use cases with mocked ports. No real infrastructure needed.
Each test verifies orchestration logic, not business rules.
"""

from dataclasses import replace
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from app.application.trading.amounts import parse_positive_amount
from app.application.trading.buy_asset import BuyAssetUseCase
from app.application.trading.deposit import DepositUseCase
from app.application.trading.dtos import (
    BuyAssetCommand,
    DepositCommand,
    OpenAccountCommand,
)
from app.application.trading.get_balance import GetBalanceUseCase
from app.application.trading.get_transaction_history import (
    GetTransactionHistoryUseCase,
)
from app.application.trading.open_account import OpenAccountUseCase
from app.application.trading.reconcile_holdings import ReconcileHoldingsUseCase
from app.domain.market.errors import UpstreamUnavailableError
from app.domain.market.ports import MarketPricePort
from app.domain.trading.entities import Account, Transaction
from app.domain.trading.errors import (
    AccountNotFoundError,
    ConcurrentUpdateError,
    InsufficientFundsError,
    InvalidAmountError,
    PersistenceError,
    PriceUnavailableError,
)
from app.domain.trading.ports import (
    AccountRepository,
    TradeSettlementPort,
    TransactionRepository,
)


def _account(balance: str = "1000.00") -> Account:
    account = Account.open("alice")
    account.balance = Decimal(balance)
    return account


def _fresh_copy(account: Account) -> Account:
    """Simulate a repository load returning a new entity each time."""
    return replace(account, holdings=dict(account.holdings))


def _buy_use_case(account: Account | None, price: str = "50000.0", **kwargs):
    market = MagicMock(spec=MarketPricePort)
    market.get_current_price.return_value = Decimal(price)
    repo = MagicMock(spec=AccountRepository)
    repo.get_by_id.side_effect = lambda _id: None if account is None else _fresh_copy(account)
    settlement = MagicMock(spec=TradeSettlementPort)
    use_case = BuyAssetUseCase(market, repo, settlement, **kwargs)
    return use_case, market, repo, settlement


class TestParsePositiveAmount:
    """Tests for amount parsing."""

    @pytest.mark.parametrize(
        "raw",
        [
            "abc",
            "",
            "0",
            "-1",
            "NaN",
            "Infinity",
            "-0.0",
            "1e999999",
            "1e-999999",
            "10000000000000000000",
            "0.0000000000000000001",
        ],
    )
    def test_rejects_invalid_values(self, raw: str) -> None:
        with pytest.raises(InvalidAmountError):
            parse_positive_amount(raw)

    def test_accepts_decimal_string(self) -> None:
        assert parse_positive_amount(" 0.01 ") == Decimal("0.01")

    def test_trailing_zeros_do_not_count_as_precision(self) -> None:
        assert parse_positive_amount("0.0100000000000000000000") == Decimal("0.01")


class TestBuyAssetUseCase:
    """Tests for the BuyAssetUseCase."""

    def test_successful_buy_debits_and_credits(self) -> None:
        """1000.00 at 50000.0 x 0.01 leaves 500.00 and one ledger record."""
        use_case, market, _repo, settlement = _buy_use_case(_account())

        result = use_case.execute(BuyAssetCommand("acc-1", "bitcoin", "0.01"))

        market.get_current_price.assert_called_once_with("bitcoin", "usd")
        assert result.balance == Decimal("500.00")
        assert result.holdings["bitcoin"] == Decimal("0.01")
        assert result.transaction.price == Decimal("50000.0")
        assert result.transaction.quantity == Decimal("0.01")
        assert result.transaction.asset == "bitcoin"

        settlement.settle.assert_called_once()
        settled_account, settled_tx = settlement.settle.call_args.args
        assert settled_account.balance == Decimal("500.00")
        assert settled_tx.id == result.transaction.id

    def test_invalid_quantity_makes_no_upstream_call(self) -> None:
        use_case, market, repo, settlement = _buy_use_case(_account())

        with pytest.raises(InvalidAmountError):
            use_case.execute(BuyAssetCommand("acc-1", "bitcoin", "abc"))

        market.get_current_price.assert_not_called()
        repo.get_by_id.assert_not_called()
        settlement.settle.assert_not_called()

    def test_out_of_range_quantity_makes_no_upstream_call(self) -> None:
        use_case, market, _repo, settlement = _buy_use_case(_account())

        with pytest.raises(InvalidAmountError):
            use_case.execute(BuyAssetCommand("acc-1", "bitcoin", "1e999999"))

        market.get_current_price.assert_not_called()
        settlement.settle.assert_not_called()

    def test_insufficient_funds_changes_nothing(self) -> None:
        use_case, _market, _repo, settlement = _buy_use_case(_account("100.00"))

        with pytest.raises(InsufficientFundsError):
            use_case.execute(BuyAssetCommand("acc-1", "bitcoin", "0.01"))

        settlement.settle.assert_not_called()

    def test_price_failure_is_price_unavailable(self) -> None:
        use_case, market, repo, settlement = _buy_use_case(_account())
        market.get_current_price.side_effect = UpstreamUnavailableError()

        with pytest.raises(PriceUnavailableError) as exc_info:
            use_case.execute(BuyAssetCommand("acc-1", "bitcoin", "0.01"))

        assert isinstance(exc_info.value.cause, UpstreamUnavailableError)
        repo.get_by_id.assert_not_called()
        settlement.settle.assert_not_called()

    def test_missing_account(self) -> None:
        use_case, *_ = _buy_use_case(None)
        with pytest.raises(AccountNotFoundError):
            use_case.execute(BuyAssetCommand("missing", "bitcoin", "0.01"))

    def test_persistence_failure_propagates(self) -> None:
        use_case, _market, _repo, settlement = _buy_use_case(_account())
        settlement.settle.side_effect = PersistenceError("disk full")

        with pytest.raises(PersistenceError):
            use_case.execute(BuyAssetCommand("acc-1", "bitcoin", "0.01"))

    def test_conflict_is_retried_with_fresh_account(self) -> None:
        """A lost CAS reloads the account and tries again, reusing the price."""
        use_case, market, repo, settlement = _buy_use_case(_account())
        settlement.settle.side_effect = [ConcurrentUpdateError("acc-1", 0), None]

        result = use_case.execute(BuyAssetCommand("acc-1", "bitcoin", "0.01"))

        assert result.balance == Decimal("500.00")
        assert settlement.settle.call_count == 2
        assert repo.get_by_id.call_count == 2
        market.get_current_price.assert_called_once()

    def test_conflict_retries_are_bounded(self) -> None:
        use_case, _market, _repo, settlement = _buy_use_case(
            _account(), conflict_retries=2
        )
        settlement.settle.side_effect = ConcurrentUpdateError("acc-1", 0)

        with pytest.raises(ConcurrentUpdateError):
            use_case.execute(BuyAssetCommand("acc-1", "bitcoin", "0.01"))

        assert settlement.settle.call_count == 2


class TestOpenAccountUseCase:
    def test_opens_with_configured_defaults(self) -> None:
        repo = MagicMock(spec=AccountRepository)
        use_case = OpenAccountUseCase(repo, Decimal("250"), ["eth"])

        result = use_case.execute(OpenAccountCommand("alice"))

        assert result.username == "alice"
        assert result.balance == Decimal("250")
        assert result.holdings == {"eth": Decimal("0")}
        repo.add.assert_called_once()


class TestDepositUseCase:
    """Tests for the DepositUseCase."""

    def test_deposit_adds_to_balance(self) -> None:
        account = _account()
        repo = MagicMock(spec=AccountRepository)
        repo.get_by_id.return_value = account

        result = DepositUseCase(repo).execute(DepositCommand(account.id, "25.50"))

        assert result.balance == Decimal("1025.50")
        repo.save.assert_called_once_with(account)

    def test_invalid_amount_rejected_before_load(self) -> None:
        repo = MagicMock(spec=AccountRepository)
        with pytest.raises(InvalidAmountError):
            DepositUseCase(repo).execute(DepositCommand("acc-1", "-5"))
        repo.get_by_id.assert_not_called()

    def test_conflict_is_retried(self) -> None:
        account = _account()
        repo = MagicMock(spec=AccountRepository)
        repo.get_by_id.side_effect = lambda _id: _fresh_copy(account)
        repo.save.side_effect = [ConcurrentUpdateError(account.id, 0), None]

        result = DepositUseCase(repo).execute(DepositCommand(account.id, "1"))

        assert result.balance == Decimal("1001.00")
        assert repo.save.call_count == 2


class TestLedgerReadPaths:
    """Tests for the ledger-backed balance, history and reconciliation."""

    def _repos(self, account: Account, records: list[Transaction]):
        account_repo = MagicMock(spec=AccountRepository)
        account_repo.get_by_id.return_value = account
        transaction_repo = MagicMock(spec=TransactionRepository)
        transaction_repo.find_by_account_id.return_value = records
        return account_repo, transaction_repo

    def test_balance_holdings_come_from_ledger(self) -> None:
        account = _account("500.00")
        account.holdings["bitcoin"] = Decimal("999")  # stale cache
        records = [
            Transaction(account.id, "bitcoin", Decimal("0.01"), Decimal("50000")),
            Transaction(account.id, "bitcoin", Decimal("0.02"), Decimal("40000")),
        ]

        result = GetBalanceUseCase(*self._repos(account, records)).execute(account.id)

        assert result.usd_balance == Decimal("500.00")
        assert result.holdings == {"bitcoin": Decimal("0.03")}

    def test_balance_of_missing_account(self) -> None:
        account_repo = MagicMock(spec=AccountRepository)
        account_repo.get_by_id.return_value = None
        use_case = GetBalanceUseCase(account_repo, MagicMock(spec=TransactionRepository))

        with pytest.raises(AccountNotFoundError):
            use_case.execute("missing")

    def test_history_maps_records(self) -> None:
        account = _account()
        record = Transaction(account.id, "solana", Decimal("3"), Decimal("20"))

        results = GetTransactionHistoryUseCase(
            *self._repos(account, [record])
        ).execute(account.id)

        assert [r.id for r in results] == [record.id]
        assert results[0].asset == "solana"

    def test_reconcile_rewrites_drifted_holdings(self) -> None:
        account = _account()
        account.holdings["bitcoin"] = Decimal("5")
        records = [Transaction(account.id, "bitcoin", Decimal("0.01"), Decimal("1"))]
        account_repo, transaction_repo = self._repos(account, records)

        result = ReconcileHoldingsUseCase(account_repo, transaction_repo).execute(account.id)

        assert result.corrected == {"bitcoin": Decimal("0.01")}
        assert result.holdings["bitcoin"] == Decimal("0.01")
        account_repo.save.assert_called_once_with(account)

    def test_reconcile_without_drift_does_not_save(self) -> None:
        account = _account()
        account.holdings["bitcoin"] = Decimal("0.01")
        records = [Transaction(account.id, "bitcoin", Decimal("0.01"), Decimal("1"))]
        account_repo, transaction_repo = self._repos(account, records)

        result = ReconcileHoldingsUseCase(account_repo, transaction_repo).execute(account.id)

        assert result.corrected == {}
        account_repo.save.assert_not_called()
