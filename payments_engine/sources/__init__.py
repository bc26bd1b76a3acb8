"""Input sources producing transaction streams."""

from payments_engine.sources.csv_file import parse_row, read_transactions, write_transactions

__all__ = ["parse_row", "read_transactions", "write_transactions"]
