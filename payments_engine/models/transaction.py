"""Transaction models: input records and recorded history."""

from dataclasses import dataclass
from decimal import Decimal

from payments_engine.models.base import ZERO
from payments_engine.models.enums import TransactionState, TransactionType


@dataclass(frozen=True)
class Transaction:
    """A single input event.

    ``amount`` is set for deposits and withdrawals and ``None`` for the
    dispute family, which only reference an earlier ``tx``.
    """

    type: TransactionType
    client: int  # u16
    tx: int  # u32
    amount: Decimal | None = None


@dataclass
class HistoryEntry:
    """An applied deposit or withdrawal kept for dispute lookups."""

    tx: int
    client: int
    kind: TransactionType
    amount: Decimal
    state: TransactionState = TransactionState.RECORDED

    @property
    def disputed(self) -> bool:
        return self.state == TransactionState.DISPUTED

    @property
    def disputable_amount(self) -> Decimal:
        """Funds frozen while this entry is disputed.

        A withdrawal's funds have already left the account, so disputing it
        holds nothing.
        """
        if self.kind == TransactionType.WITHDRAWAL:
            return ZERO
        return self.amount
