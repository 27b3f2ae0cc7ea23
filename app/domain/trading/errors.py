"""
Domain-specific errors for the trading bounded context.

All errors raised from the domain layer must be defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class TradingDomainError(Exception):
    """Base error for all trading domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class InvalidAmountError(TradingDomainError):
    """Raised when a quantity or amount is not a positive finite number."""

    def __init__(self, raw_value: str) -> None:
        super().__init__(f"Invalid amount: {raw_value!r}")
        self.raw_value = raw_value


class AccountNotFoundError(TradingDomainError):
    """Raised when an account cannot be found."""

    def __init__(self, account_id: str) -> None:
        super().__init__(f"Account not found: {account_id}")
        self.account_id = account_id


class UsernameTakenError(TradingDomainError):
    """Raised when opening an account with a username already in use."""

    def __init__(self, username: str) -> None:
        super().__init__(f"Username already taken: {username}")
        self.username = username


class InsufficientFundsError(TradingDomainError):
    """Raised when the account lacks USD for a purchase."""

    def __init__(self, required: str, available: str) -> None:
        super().__init__(
            f"Insufficient funds: required {required}, available {available}"
        )
        self.required = required
        self.available = available


class InsufficientHoldingsError(TradingDomainError):
    """Raised when a holdings adjustment would leave a negative quantity."""

    def __init__(self, asset: str, held: str, requested: str) -> None:
        super().__init__(
            f"Insufficient {asset} holdings: held {held}, requested {requested}"
        )
        self.asset = asset
        self.held = held
        self.requested = requested


class PriceUnavailableError(TradingDomainError):
    """Raised when the current price needed for a trade cannot be obtained.

    The underlying market data error is kept on ``cause``.
    """

    def __init__(self, asset: str, cause: Exception) -> None:
        super().__init__(f"Price unavailable for {asset}: {cause}")
        self.asset = asset
        self.cause = cause


class PersistenceError(TradingDomainError):
    """Raised when account or ledger state cannot be stored."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Persistence failed: {reason}")
        self.reason = reason


class ConcurrentUpdateError(TradingDomainError):
    """Raised when an account changed between load and save."""

    def __init__(self, account_id: str, expected_version: int) -> None:
        super().__init__(
            f"Account {account_id} was modified concurrently "
            f"(expected version {expected_version})"
        )
        self.account_id = account_id
        self.expected_version = expected_version
