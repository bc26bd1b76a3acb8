"""Domain models for the payments engine."""

from payments_engine.models.enums import (
    LockedAccountPolicy,
    Outcome,
    TransactionState,
    TransactionType,
)
from payments_engine.models.base import DEFAULT_PRECISION, MAX_AMOUNT, to_amount
from payments_engine.models.account import Account, AccountSnapshot
from payments_engine.models.transaction import HistoryEntry, Transaction

__all__ = [
    "DEFAULT_PRECISION",
    "MAX_AMOUNT",
    "Account",
    "AccountSnapshot",
    "HistoryEntry",
    "LockedAccountPolicy",
    "Outcome",
    "Transaction",
    "TransactionState",
    "TransactionType",
    "to_amount",
]
