"""History of applied deposits and withdrawals, keyed by transaction id."""

from dataclasses import dataclass, field
from decimal import Decimal

from payments_engine.exceptions import DuplicateTransactionError, InvalidStateError, UnknownReferenceError
from payments_engine.models import HistoryEntry, TransactionState, TransactionType


@dataclass
class TransactionHistory:
    """Lookup table for dispute-family operations.

    Entries are only ever added and have their state toggled; nothing is
    removed during a run.
    """

    entries: dict[int, HistoryEntry] = field(default_factory=dict)

    def __contains__(self, tx: object) -> bool:
        return tx in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, tx: int) -> HistoryEntry | None:
        """Get an entry by transaction id."""
        return self.entries.get(tx)

    def ensure_new(self, tx: int) -> None:
        """Reject a deposit or withdrawal that reuses a recorded tx id."""
        if tx in self.entries:
            raise DuplicateTransactionError(f"Transaction {tx} already recorded")

    def record(self, tx: int, client: int, kind: TransactionType, amount: Decimal) -> HistoryEntry:
        """Record an applied deposit or withdrawal."""
        if not kind.carries_amount:
            raise ValueError(f"Only deposits and withdrawals are recorded, got {kind.value}")
        self.ensure_new(tx)

        entry = HistoryEntry(tx=tx, client=client, kind=kind, amount=amount)
        self.entries[tx] = entry
        return entry

    def lookup(self, tx: int, client: int, expected: TransactionState) -> HistoryEntry:
        """Find the entry a dispute-family operation refers to.

        Raises
        ------
        UnknownReferenceError
            If ``tx`` was never recorded or belongs to another client.
        InvalidStateError
            If the entry is not in the ``expected`` state.
        """
        entry = self.entries.get(tx)
        if entry is None:
            raise UnknownReferenceError(f"Transaction {tx} not found")
        if entry.client != client:
            raise UnknownReferenceError(f"Transaction {tx} does not belong to client {client}")
        if entry.state != expected:
            raise InvalidStateError(f"Transaction {tx} is {entry.state.value}, expected {expected.value}")
        return entry
