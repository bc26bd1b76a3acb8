"""Single-pass payments engine: deposits, withdrawals and the dispute lifecycle."""

from payments_engine.models import (
    Account,
    AccountSnapshot,
    LockedAccountPolicy,
    Outcome,
    Transaction,
    TransactionState,
    TransactionType,
)
from payments_engine.config import EngineConfig, PaymentsEngineConfig
from payments_engine.processor import ProcessingStats, TransactionProcessor
from payments_engine.store import AccountLedger, LedgerSnapshot, TransactionHistory

__version__ = "0.1.0"

__all__ = [
    "Account",
    "AccountLedger",
    "AccountSnapshot",
    "EngineConfig",
    "LedgerSnapshot",
    "LockedAccountPolicy",
    "Outcome",
    "PaymentsEngineConfig",
    "ProcessingStats",
    "Transaction",
    "TransactionHistory",
    "TransactionProcessor",
    "TransactionState",
    "TransactionType",
]
