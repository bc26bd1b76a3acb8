"""Synthetic transaction stream generator."""

from __future__ import annotations

from collections import OrderedDict
from decimal import Decimal
from typing import Iterator

from payments_engine.generators.base import BaseGenerator
from payments_engine.models import Transaction, TransactionType


class TransactionStreamGenerator(BaseGenerator):
    """Generate a plausible stream of client transactions.

    Deposits and withdrawals dominate. Disputes target earlier deposits,
    and resolves and chargebacks target open disputes, so most of the
    dispute family applies cleanly. A small share of dispute-family
    records deliberately reference transactions that never happened.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    num_clients : int
        Client ids are drawn from ``1..num_clients``.
    invalid_rate : float
        Probability that a dispute-family record references an unknown tx.
    max_amount : Decimal
        Upper bound for deposit and withdrawal amounts.
    """

    TYPE_WEIGHTS = OrderedDict(
        [
            (TransactionType.DEPOSIT, 0.55),
            (TransactionType.WITHDRAWAL, 0.30),
            (TransactionType.DISPUTE, 0.08),
            (TransactionType.RESOLVE, 0.04),
            (TransactionType.CHARGEBACK, 0.03),
        ]
    )

    def __init__(
        self,
        seed: int | None = None,
        num_clients: int = 100,
        invalid_rate: float = 0.02,
        max_amount: Decimal = Decimal("5000"),
    ) -> None:
        super().__init__(seed)
        if not 1 <= num_clients <= 2**16 - 1:
            raise ValueError(f"num_clients must be within 1..65535, got {num_clients}")
        self.num_clients = num_clients
        self.invalid_rate = invalid_rate
        self.max_amount = max_amount

        self._next_tx = 1
        self._deposits: list[tuple[int, int]] = []  # (client, tx) open to dispute
        self._disputed: list[tuple[int, int]] = []

    def generate(self, count: int) -> Iterator[Transaction]:
        """Yield ``count`` transactions.

        Parameters
        ----------
        count : int
            Number of records to produce.

        Yields
        ------
        Transaction
            Generated transaction.
        """
        for _ in range(count):
            yield self._next()

    def _next(self) -> Transaction:
        tx_type = self.fake.random_element(elements=self.TYPE_WEIGHTS)

        if tx_type.carries_amount:
            return self._money_movement(tx_type)

        if self.fake.random.random() < self.invalid_rate:
            return Transaction(
                type=tx_type,
                client=self._client(),
                tx=self._next_tx + self.fake.random_int(1_000_000, 2_000_000),
            )

        if tx_type == TransactionType.DISPUTE and self._deposits:
            client, tx = self._take(self._deposits)
            self._disputed.append((client, tx))
            return Transaction(type=tx_type, client=client, tx=tx)

        if tx_type in (TransactionType.RESOLVE, TransactionType.CHARGEBACK) and self._disputed:
            client, tx = self._take(self._disputed)
            if tx_type == TransactionType.RESOLVE:
                self._deposits.append((client, tx))
            return Transaction(type=tx_type, client=client, tx=tx)

        # Nothing to dispute yet
        return self._money_movement(TransactionType.DEPOSIT)

    def _money_movement(self, tx_type: TransactionType) -> Transaction:
        client = self._client()
        tx = self._next_tx
        self._next_tx += 1

        if tx_type == TransactionType.DEPOSIT:
            self._deposits.append((client, tx))

        return Transaction(type=tx_type, client=client, tx=tx, amount=self._amount())

    def _client(self) -> int:
        return self.fake.random_int(1, self.num_clients)

    def _amount(self) -> Decimal:
        """Amount with four decimal places in ``(0, max_amount]``."""
        upper = int(self.max_amount.scaleb(4))
        return Decimal(self.fake.random_int(1, upper)).scaleb(-4)

    def _take(self, pool: list[tuple[int, int]]) -> tuple[int, int]:
        """Remove and return a random element."""
        index = self.fake.random_int(0, len(pool) - 1)
        pool[index], pool[-1] = pool[-1], pool[index]
        return pool.pop()
