"""Account ledger enforcing per-client balance invariants."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterator

from payments_engine.exceptions import (
    AccountLockedError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidStateError,
    UnknownAccountError,
)
from payments_engine.models import Account, AccountSnapshot, LockedAccountPolicy
from payments_engine.models.base import MAX_AMOUNT, ZERO

logger = logging.getLogger(__name__)


class LedgerSnapshot:
    """Restartable view over the ledger's accounts, ordered by client id.

    Nothing is copied up front: every iteration walks the accounts as they
    are at that moment.
    """

    def __init__(self, accounts: dict[int, Account]) -> None:
        self._accounts = accounts

    def __iter__(self) -> Iterator[AccountSnapshot]:
        for client in sorted(self._accounts):
            yield self._accounts[client].snapshot()

    def __len__(self) -> int:
        return len(self._accounts)


@dataclass
class AccountLedger:
    """In-memory ledger of client accounts.

    Every mutation validates before touching balances, so a rejected
    operation leaves the ledger exactly as it was.

    Parameters
    ----------
    locked_policy : LockedAccountPolicy
        Whether deposits and withdrawals are refused on locked accounts.
    """

    locked_policy: LockedAccountPolicy = LockedAccountPolicy.REJECT
    accounts: dict[int, Account] = field(default_factory=dict)

    def get(self, client: int) -> Account | None:
        """Get an account by client id."""
        return self.accounts.get(client)

    def __contains__(self, client: object) -> bool:
        return client in self.accounts

    def __len__(self) -> int:
        return len(self.accounts)

    def deposit(self, client: int, amount: Decimal) -> Account:
        """Credit ``amount`` to the client, opening the account if needed."""
        self._require_positive(amount)
        account = self.accounts.get(client)
        if account is not None:
            self._require_unlocked(account)
        balance = account.total if account is not None else ZERO
        if balance + amount > MAX_AMOUNT:
            raise InvalidAmountError(f"Client {client} balance would exceed {MAX_AMOUNT:f} after depositing {amount}")
        if account is None:
            account = Account(client=client)
            self.accounts[client] = account
            logger.debug("Opened account for client %d", client)

        account.available += amount
        account.check_invariants()
        return account

    def withdraw(self, client: int, amount: Decimal) -> Account:
        """Debit ``amount`` from the client's available funds."""
        self._require_positive(amount)
        account = self._require_account(client)
        self._require_unlocked(account)
        if account.available < amount:
            raise InsufficientFundsError(
                f"Client {client} has {account.available} available, {amount} requested"
            )

        account.available -= amount
        account.check_invariants()
        return account

    def hold(self, client: int, amount: Decimal) -> Account:
        """Move ``amount`` from available to held."""
        account = self._require_account(client)
        if account.available < amount:
            raise InsufficientFundsError(
                f"Client {client} has {account.available} available, cannot hold {amount}"
            )

        account.available -= amount
        account.held += amount
        account.check_invariants()
        return account

    def release(self, client: int, amount: Decimal) -> Account:
        """Move ``amount`` from held back to available."""
        account = self._require_account(client)
        self._require_held(account, amount)

        account.held -= amount
        account.available += amount
        account.check_invariants()
        return account

    def chargeback(self, client: int, amount: Decimal) -> Account:
        """Remove ``amount`` from held funds and lock the account."""
        account = self._require_account(client)
        self._require_held(account, amount)

        account.held -= amount
        account.locked = True
        account.check_invariants()
        logger.info("Client %d locked after chargeback of %s", client, amount)
        return account

    def snapshot(self) -> LedgerSnapshot:
        """Return a view of every known account, sorted by client id."""
        return LedgerSnapshot(self.accounts)

    def _require_account(self, client: int) -> Account:
        account = self.accounts.get(client)
        if account is None:
            raise UnknownAccountError(f"Client {client} has no account")
        return account

    def _require_unlocked(self, account: Account) -> None:
        if account.locked and self.locked_policy == LockedAccountPolicy.REJECT:
            raise AccountLockedError(f"Client {account.client} account is locked")

    @staticmethod
    def _require_positive(amount: Decimal | None) -> None:
        if amount is None or amount <= ZERO:
            raise InvalidAmountError(f"Amount must be positive, got {amount}")

    @staticmethod
    def _require_held(account: Account, amount: Decimal) -> None:
        if account.held < amount:
            raise InvalidStateError(f"Client {account.client} holds {account.held}, cannot settle {amount}")
