"""
Parsing of user-entered amounts and quantities.
"""

from decimal import Decimal, InvalidOperation

from app.domain.trading.errors import InvalidAmountError

# Largest power of ten and finest fraction accepted for an amount.
MAX_AMOUNT_EXPONENT = 18
MIN_AMOUNT_EXPONENT = -18


def parse_positive_amount(raw_value: str) -> Decimal:
    """Parse a positive finite decimal.

    Values at or above 10**19, or with more than 18 fractional digits,
    are rejected so that price arithmetic stays within Decimal range.

    Raises:
        InvalidAmountError: For non-numeric, non-finite, zero, negative or
            out-of-range input.
    """
    try:
        value = Decimal(raw_value.strip())
    except (InvalidOperation, AttributeError) as exc:
        raise InvalidAmountError(str(raw_value)) from exc
    if not value.is_finite() or value <= 0:
        raise InvalidAmountError(str(raw_value))
    if (
        value.adjusted() > MAX_AMOUNT_EXPONENT
        or value.normalize().as_tuple().exponent < MIN_AMOUNT_EXPONENT
    ):
        raise InvalidAmountError(str(raw_value))
    return value
