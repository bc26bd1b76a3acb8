"""CSV reading and writing of transaction records."""

import csv
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import IO, Iterable, Iterator

from payments_engine.exceptions import RecordParseError
from payments_engine.models import Transaction, TransactionType

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("type", "client", "tx")
MAX_CLIENT_ID = 2**16 - 1
MAX_TX_ID = 2**32 - 1


def read_transactions(source: str | Path | IO[str], delimiter: str = ",") -> Iterator[Transaction]:
    """Lazily read transactions from a CSV file or text stream.

    Fields are whitespace-trimmed and the ``amount`` column may be left off
    entirely on dispute, resolve and chargeback rows. Rows that fail to parse
    are logged and skipped.

    Parameters
    ----------
    source : str | Path | IO[str]
        File path or an open text stream.
    delimiter : str
        Field delimiter.

    Yields
    ------
    Transaction
        Parsed transactions, in file order.

    Raises
    ------
    RecordParseError
        If the header is missing a required column.
    """
    if isinstance(source, (str, Path)):
        with open(source, newline="", encoding="utf-8") as f:
            yield from _read(f, delimiter)
    else:
        yield from _read(source, delimiter)


def _read(stream: IO[str], delimiter: str) -> Iterator[Transaction]:
    reader = csv.DictReader(stream, delimiter=delimiter, skipinitialspace=True)
    if reader.fieldnames is None:
        return

    reader.fieldnames = [name.strip().lower() for name in reader.fieldnames]
    missing = [column for column in REQUIRED_COLUMNS if column not in reader.fieldnames]
    if missing:
        raise RecordParseError(f"CSV header is missing columns: {', '.join(missing)}")

    skipped = 0
    for row in reader:
        try:
            yield parse_row(row)
        except RecordParseError as exc:
            skipped += 1
            logger.warning("Skipping line %d: %s", reader.line_num, exc)

    if skipped:
        logger.info("Skipped %d malformed rows", skipped)


def parse_row(row: dict[str | None, str | list[str] | None]) -> Transaction:
    """Convert a CSV row into a transaction.

    Parameters
    ----------
    row : dict
        Mapping of lower-case column name to raw value, as produced by
        ``csv.DictReader``.

    Returns
    -------
    Transaction
        Parsed transaction.

    Raises
    ------
    RecordParseError
        If the type is unknown, an id is out of range, or the amount is not
        a number.
    """
    raw_type = _field(row, "type").lower()
    try:
        tx_type = TransactionType(raw_type)
    except ValueError as exc:
        raise RecordParseError(f"Unknown transaction type: {raw_type!r}") from exc

    client = _parse_id(_field(row, "client"), "client", MAX_CLIENT_ID)
    tx = _parse_id(_field(row, "tx"), "tx", MAX_TX_ID)

    amount = None
    raw_amount = _field(row, "amount")
    if tx_type.carries_amount and raw_amount:
        try:
            amount = Decimal(raw_amount)
        except InvalidOperation as exc:
            raise RecordParseError(f"Malformed amount: {raw_amount!r}") from exc

    return Transaction(type=tx_type, client=client, tx=tx, amount=amount)


def _field(row: dict, name: str) -> str:
    value = row.get(name)
    if value is None:
        return ""
    return value.strip()


def _parse_id(raw: str, name: str, upper: int) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise RecordParseError(f"Malformed {name} id: {raw!r}") from exc
    if not 0 <= value <= upper:
        raise RecordParseError(f"{name} id {value} out of range 0..{upper}")
    return value


def write_transactions(transactions: Iterable[Transaction], target: str | Path | IO[str]) -> int:
    """Write transactions as CSV in the format ``read_transactions`` accepts.

    Returns
    -------
    int
        Number of rows written.
    """
    if isinstance(target, (str, Path)):
        with open(target, "w", newline="", encoding="utf-8") as f:
            return _write(transactions, f)
    return _write(transactions, target)


def _write(transactions: Iterable[Transaction], stream: IO[str]) -> int:
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(("type", "client", "tx", "amount"))
    count = 0
    for transaction in transactions:
        amount = "" if transaction.amount is None else f"{transaction.amount:f}"
        writer.writerow((transaction.type.value, transaction.client, transaction.tx, amount))
        count += 1
    return count
