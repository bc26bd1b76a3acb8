"""Pytest configuration and fixtures."""

import logging
from typing import Iterator

import pytest

from payments_engine.processor import TransactionProcessor
from payments_engine.store import AccountLedger


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def ledger() -> AccountLedger:
    """Fresh ledger with the default locked-account policy."""
    return AccountLedger()


@pytest.fixture
def processor() -> TransactionProcessor:
    """Fresh processor with default configuration."""
    return TransactionProcessor()


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Undo handler and level changes made by setup_logging."""
    root = logging.getLogger()
    package = logging.getLogger("payments_engine")
    handlers, root_level, package_level = root.handlers[:], root.level, package.level
    yield
    root.handlers[:] = handlers
    root.setLevel(root_level)
    package.setLevel(package_level)
