"""
Ledger reconstruction.

The transaction ledger is the source of truth for holdings; the
holdings map stored on an account is only a cache of these sums.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable

from app.domain.trading.entities import Transaction


def holdings_from_ledger(transactions: Iterable[Transaction]) -> dict[str, Decimal]:
    """Sum signed transaction quantities per asset.

    Args:
        transactions: Ledger records of a single account.

    Returns:
        Asset symbol to net quantity, for every asset that appears in the ledger.
    """
    totals: dict[str, Decimal] = defaultdict(Decimal)
    for transaction in transactions:
        totals[transaction.asset] += transaction.quantity
    return dict(totals)


def holdings_drift(
    cached: dict[str, Decimal], ledger: dict[str, Decimal]
) -> dict[str, Decimal]:
    """Return assets whose cached quantity differs from the ledger sum.

    Assets absent from the ledger are expected to be zero.
    """
    drift = {}
    for asset in set(cached) | set(ledger):
        expected = ledger.get(asset, Decimal("0"))
        if cached.get(asset, Decimal("0")) != expected:
            drift[asset] = expected
    return drift
