"""Output sinks for account snapshots."""

from payments_engine.sinks.console import ConsoleSink
from payments_engine.sinks.csv_file import CsvSink
from payments_engine.sinks.json_file import JsonFileSink
from payments_engine.sinks.kafka import KafkaSink

__all__ = ["ConsoleSink", "CsvSink", "JsonFileSink", "KafkaSink"]
