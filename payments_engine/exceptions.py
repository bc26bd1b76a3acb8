"""Custom exception hierarchy for payments-engine."""

from payments_engine.models.enums import Outcome


class EngineError(Exception):
    """Base exception for all payments-engine errors."""


class TransactionRejectedError(EngineError):
    """Raised when a single transaction cannot be applied.

    Rejections are local to the offending transaction: the processor maps
    them to an :class:`Outcome` and carries on with the stream. Every
    subclass names its own ``outcome``.
    """

    outcome: Outcome


class InvalidAmountError(TransactionRejectedError):
    """Raised when an amount is missing, malformed or not positive."""

    outcome = Outcome.INVALID_AMOUNT


class InsufficientFundsError(TransactionRejectedError):
    """Raised when available funds do not cover the requested amount."""

    outcome = Outcome.INSUFFICIENT_FUNDS


class UnknownAccountError(TransactionRejectedError):
    """Raised when an operation targets a client that never transacted."""

    outcome = Outcome.UNKNOWN_ACCOUNT


class UnknownReferenceError(TransactionRejectedError):
    """Raised when a dispute-family operation references an unknown tx."""

    outcome = Outcome.UNKNOWN_REFERENCE


class InvalidStateError(TransactionRejectedError):
    """Raised when a transaction is in the wrong state for the operation."""

    outcome = Outcome.INVALID_STATE


class AccountLockedError(TransactionRejectedError):
    """Raised when a deposit or withdrawal targets a locked account."""

    outcome = Outcome.ACCOUNT_LOCKED


class DuplicateTransactionError(TransactionRejectedError):
    """Raised when a deposit or withdrawal reuses a recorded tx id."""

    outcome = Outcome.DUPLICATE_TRANSACTION


class InvariantViolationError(EngineError):
    """Raised when account balances break total == available + held."""


class RecordParseError(EngineError):
    """Raised when an input row cannot be parsed into a transaction."""


class ConfigurationError(EngineError):
    """Raised when configuration is invalid or missing."""


class SinkError(EngineError):
    """Raised when a sink operation fails."""
