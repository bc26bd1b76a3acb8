"""JSON file sink for exporting account snapshots."""

import json
from pathlib import Path
from typing import Any, Iterable

from payments_engine.models.base import DEFAULT_PRECISION
from payments_engine.sinks.serialization import to_dict


class JsonFileSink:
    """Output data to JSON files, one file per entity type."""

    def __init__(
        self,
        output_dir: str | Path,
        pretty: bool = False,
        precision: int = DEFAULT_PRECISION,
    ) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON output.
        precision : int
            Decimal places written for every amount.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self.precision = precision
        self._counts: dict[str, int] = {}

    def write_batch(self, entity_type: str, records: Iterable[Any]) -> None:
        """Write a batch of records to ``<entity_type>.json``."""
        file_path = self.output_dir / f"{entity_type}.json"

        data = [to_dict(record, self.precision) for record in records]

        with open(file_path, "w", encoding="utf-8") as f:
            if self.pretty:
                json.dump(data, f, indent=2, ensure_ascii=False)
            else:
                json.dump(data, f, ensure_ascii=False)

        self._counts[entity_type] = len(data)

    def close(self) -> None:
        """Print summary."""
        print(f"JSON files written to: {self.output_dir}")
        for entity_type, count in self._counts.items():
            print(f"  {entity_type}: {count} records")
