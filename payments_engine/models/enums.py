"""Enumeration types for the payments engine."""

from enum import Enum


class TransactionType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def carries_amount(self) -> bool:
        """Deposits and withdrawals move money; the rest reference a tx."""
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


class TransactionState(str, Enum):
    RECORDED = "recorded"
    DISPUTED = "disputed"
    CHARGED_BACK = "charged_back"


class LockedAccountPolicy(str, Enum):
    """What happens to deposits and withdrawals once an account is locked."""

    REJECT = "reject"
    ALLOW = "allow"


class Outcome(str, Enum):
    APPLIED = "applied"
    INVALID_AMOUNT = "invalid_amount"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    UNKNOWN_ACCOUNT = "unknown_account"
    UNKNOWN_REFERENCE = "unknown_reference"
    INVALID_STATE = "invalid_state"
    ACCOUNT_LOCKED = "account_locked"
    DUPLICATE_TRANSACTION = "duplicate_transaction"
