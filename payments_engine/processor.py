"""Transaction processor driving the ledger through the dispute lifecycle."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from payments_engine.config import EngineConfig
from payments_engine.exceptions import InvalidAmountError, TransactionRejectedError
from payments_engine.models import Outcome, Transaction, TransactionState, TransactionType, to_amount
from payments_engine.store import AccountLedger, LedgerSnapshot, TransactionHistory

logger = logging.getLogger(__name__)


@dataclass
class ProcessingStats:
    """Track how many transactions were applied or rejected."""

    processed: int = 0
    applied: int = 0
    rejections: Counter = field(default_factory=Counter)

    @property
    def rejected(self) -> int:
        return sum(self.rejections.values())

    def rejected_by(self, outcome: Outcome) -> int:
        """Count rejections for a single outcome."""
        return self.rejections[outcome]

    def record(self, outcome: Outcome) -> None:
        self.processed += 1
        if outcome == Outcome.APPLIED:
            self.applied += 1
        else:
            self.rejections[outcome] += 1


class TransactionProcessor:
    """Apply transactions one at a time, in input order.

    The processor owns its ledger and history exclusively. A bad transaction
    never stops the run: its rejection is logged, counted and returned as an
    :class:`Outcome`.

    Parameters
    ----------
    ledger : AccountLedger | None
        Ledger to mutate. A fresh one honouring ``config.locked_policy`` is
        created when omitted.
    history : TransactionHistory | None
        Recorded deposits and withdrawals.
    config : EngineConfig | None
        Processing rules.
    """

    def __init__(
        self,
        ledger: AccountLedger | None = None,
        history: TransactionHistory | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.ledger = ledger if ledger is not None else AccountLedger(locked_policy=self.config.locked_policy)
        self.history = history if history is not None else TransactionHistory()
        self.stats = ProcessingStats()

    def process(self, transaction: Transaction) -> Outcome:
        """Apply a single transaction and report what happened."""
        try:
            self._apply(transaction)
        except TransactionRejectedError as exc:
            outcome = exc.outcome
            logger.warning(
                "Rejected %s tx=%d client=%d: %s",
                transaction.type.value,
                transaction.tx,
                transaction.client,
                exc,
                extra={"tx": transaction.tx, "client": transaction.client, "outcome": outcome.value},
            )
        else:
            outcome = Outcome.APPLIED

        self.stats.record(outcome)
        return outcome

    def process_all(self, transactions: Iterable[Transaction]) -> LedgerSnapshot:
        """Process a stream of transactions and return the resulting accounts."""
        for transaction in transactions:
            self.process(transaction)

        logger.info(
            "Processed %d transactions: applied=%d, rejected=%d",
            self.stats.processed,
            self.stats.applied,
            self.stats.rejected,
        )
        return self.snapshot()

    def snapshot(self) -> LedgerSnapshot:
        """Return the current view of every account."""
        return self.ledger.snapshot()

    def _apply(self, transaction: Transaction) -> None:
        client, tx = transaction.client, transaction.tx

        match transaction.type:
            case TransactionType.DEPOSIT:
                amount = self._amount(transaction)
                self.history.ensure_new(tx)
                self.ledger.deposit(client, amount)
                self.history.record(tx, client, transaction.type, amount)

            case TransactionType.WITHDRAWAL:
                amount = self._amount(transaction)
                self.history.ensure_new(tx)
                self.ledger.withdraw(client, amount)
                self.history.record(tx, client, transaction.type, amount)

            case TransactionType.DISPUTE:
                entry = self.history.lookup(tx, client, TransactionState.RECORDED)
                self.ledger.hold(client, entry.disputable_amount)
                entry.state = TransactionState.DISPUTED

            case TransactionType.RESOLVE:
                entry = self.history.lookup(tx, client, TransactionState.DISPUTED)
                self.ledger.release(client, entry.disputable_amount)
                entry.state = TransactionState.RECORDED

            case TransactionType.CHARGEBACK:
                entry = self.history.lookup(tx, client, TransactionState.DISPUTED)
                self.ledger.chargeback(client, entry.disputable_amount)
                entry.state = TransactionState.CHARGED_BACK

    def _amount(self, transaction: Transaction) -> Decimal:
        if transaction.amount is None:
            raise InvalidAmountError(f"{transaction.type.value} tx={transaction.tx} has no amount")
        return to_amount(transaction.amount, self.config.precision)
