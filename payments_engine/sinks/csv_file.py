"""CSV sink writing account snapshots."""

import csv
import sys
from pathlib import Path
from typing import IO, Any

from payments_engine.models.base import DEFAULT_PRECISION
from payments_engine.sinks.serialization import format_amount

COLUMNS = ("client", "available", "held", "total", "locked")


class CsvSink:
    """Output account snapshots as CSV, to stdout by default."""

    def __init__(
        self,
        target: str | Path | IO[str] | None = None,
        precision: int = DEFAULT_PRECISION,
    ) -> None:
        """Initialize CSV sink.

        Parameters
        ----------
        target : str | Path | IO[str] | None
            File path or open text stream. ``None`` writes to stdout.
        precision : int
            Decimal places written for every amount.
        """
        self.precision = precision
        self._owns_stream = isinstance(target, (str, Path))
        if self._owns_stream:
            self._stream: IO[str] = open(target, "w", newline="", encoding="utf-8")
        else:
            self._stream = target if target is not None else sys.stdout
        self._writer = csv.writer(self._stream, lineterminator="\n")
        self._header_written = False
        self._counts: dict[str, int] = {}

    def write_batch(self, entity_type: str, records: Any) -> None:
        """Write snapshots, emitting the header before the first row."""
        if not self._header_written:
            self._writer.writerow(COLUMNS)
            self._header_written = True

        count = 0
        for record in records:
            self._writer.writerow(
                (
                    record.client,
                    format_amount(record.available, self.precision),
                    format_amount(record.held, self.precision),
                    format_amount(record.total, self.precision),
                    "true" if record.locked else "false",
                )
            )
            count += 1

        self._counts[entity_type] = self._counts.get(entity_type, 0) + count

    def close(self) -> None:
        """Flush, and close the file if the sink opened it."""
        self._stream.flush()
        if self._owns_stream:
            self._stream.close()
