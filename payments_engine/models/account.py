"""Account model holding a client's balances."""

from dataclasses import dataclass
from decimal import Decimal

from payments_engine.exceptions import InvariantViolationError
from payments_engine.models.base import ZERO


@dataclass(frozen=True)
class AccountSnapshot:
    """Point-in-time view of an account, as handed to sinks."""

    client: int
    available: Decimal
    held: Decimal
    total: Decimal
    locked: bool


@dataclass
class Account:
    """Per-client balances.

    ``total`` is derived from ``available`` and ``held`` so the two can never
    drift apart. Accounts are only mutated through ``AccountLedger``.
    """

    client: int
    available: Decimal = ZERO
    held: Decimal = ZERO
    locked: bool = False

    @property
    def total(self) -> Decimal:
        return self.available + self.held

    def check_invariants(self) -> None:
        """Raise if any balance went negative."""
        if self.available < ZERO:
            raise InvariantViolationError(
                f"Client {self.client} available balance is negative: {self.available}"
            )
        if self.held < ZERO:
            raise InvariantViolationError(f"Client {self.client} held balance is negative: {self.held}")

    def snapshot(self) -> AccountSnapshot:
        return AccountSnapshot(
            client=self.client,
            available=self.available,
            held=self.held,
            total=self.total,
            locked=self.locked,
        )
