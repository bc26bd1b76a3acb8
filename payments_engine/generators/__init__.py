"""Synthetic data generators."""

from payments_engine.generators.base import BaseGenerator
from payments_engine.generators.transaction import TransactionStreamGenerator

__all__ = ["BaseGenerator", "TransactionStreamGenerator"]
