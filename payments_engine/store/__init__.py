"""In-memory stores for accounts and transaction history."""

from payments_engine.store.history import TransactionHistory
from payments_engine.store.ledger import AccountLedger, LedgerSnapshot

__all__ = ["AccountLedger", "LedgerSnapshot", "TransactionHistory"]
