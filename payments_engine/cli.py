"""Command-line interface for payments-engine.

Usage::

    payments-engine transactions.csv > accounts.csv
    payments-engine process transactions.csv --output-format json --output out/
    payments-engine generate --clients 50 --transactions 10000 --output transactions.csv
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

from payments_engine.config import OUTPUT_FORMATS, KafkaConfig, OutputConfig, PaymentsEngineConfig
from payments_engine.exceptions import ConfigurationError, RecordParseError, SinkError
from payments_engine.generators import TransactionStreamGenerator
from payments_engine.logging import setup_logging
from payments_engine.models import LockedAccountPolicy
from payments_engine.processor import TransactionProcessor
from payments_engine.sinks import ConsoleSink, CsvSink, JsonFileSink, KafkaSink
from payments_engine.sources import read_transactions, write_transactions

logger = logging.getLogger(__name__)

COMMANDS = ("process", "generate")
GLOBAL_OPTIONS_WITH_VALUE = ("--log-level", "--log-format")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="payments-engine",
        description="Replay a transaction stream and report client account balances",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (default: LOG_LEVEL or WARNING)",
    )
    parser.add_argument(
        "--log-format",
        choices=["standard", "json"],
        default=None,
        help="Log format (default: LOG_FORMAT or standard)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    process = subparsers.add_parser("process", help="Process a transaction CSV")
    process.add_argument("input", type=Path, help="Transaction CSV file")
    process.add_argument(
        "--output-format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Where account snapshots go (default: OUTPUT_FORMAT or csv)",
    )
    process.add_argument(
        "--output",
        type=Path,
        default=None,
        help="CSV file or JSON directory (default: stdout / OUTPUT_DIR); not valid with console or kafka",
    )
    process.add_argument(
        "--locked-policy",
        choices=[policy.value for policy in LockedAccountPolicy],
        default=None,
        help="Deposits/withdrawals on locked accounts (default: reject)",
    )

    generate = subparsers.add_parser("generate", help="Write a synthetic transaction CSV")
    generate.add_argument(
        "--clients",
        type=int,
        default=100,
        help="Number of distinct clients (default: 100)",
    )
    generate.add_argument(
        "--transactions",
        type=int,
        default=1000,
        help="Number of records to generate (default: 1000)",
    )
    generate.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility (default: SEED)",
    )
    generate.add_argument(
        "--invalid-rate",
        type=float,
        default=0.02,
        help="Share of dispute-family records with unknown references (default: 0.02)",
    )
    generate.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output CSV file (default: stdout)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    argv = list(sys.argv[1:] if argv is None else argv)
    args = build_parser().parse_args(_with_default_command(argv))

    try:
        config = PaymentsEngineConfig.from_env()
    except ConfigurationError as exc:
        setup_logging()
        logger.error("Invalid configuration: %s", exc)
        return 1

    setup_logging(args.log_level or config.log_level, args.log_format or config.log_format)

    try:
        if args.command == "generate":
            return run_generate(args, config)
        return run_process(args, config)
    except (ConfigurationError, RecordParseError, SinkError, OSError, UnicodeDecodeError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 1


def _with_default_command(argv: list[str]) -> list[str]:
    """Treat `payments-engine transactions.csv` as `payments-engine process transactions.csv`."""
    index = 0
    while index < len(argv):
        arg = argv[index]
        if arg in GLOBAL_OPTIONS_WITH_VALUE:
            index += 2
        elif arg.startswith("-"):
            index += 1
        elif arg in COMMANDS:
            return argv
        else:
            return argv[:index] + ["process"] + argv[index:]
    return argv


def run_process(args: argparse.Namespace, config: PaymentsEngineConfig) -> int:
    """Replay the input file and write account snapshots."""
    engine_config = config.engine
    if args.locked_policy:
        engine_config = replace(engine_config, locked_policy=LockedAccountPolicy(args.locked_policy))

    output = config.output
    if args.output_format:
        output = replace(output, format=args.output_format)
    if args.output and output.format in ("console", "kafka"):
        raise ConfigurationError(f"--output cannot be used with the {output.format} output format")
    if args.output and output.format == "json":
        output = replace(output, json_output_dir=args.output)

    processor = TransactionProcessor(config=engine_config)
    snapshot = processor.process_all(read_transactions(args.input, delimiter=config.csv.delimiter))

    sink = build_sink(output, config.kafka, engine_config.precision, args.output)
    try:
        sink.write_batch("accounts", snapshot)
    finally:
        sink.close()

    logger.info(
        "Wrote %d accounts (%d applied, %d rejected)",
        len(snapshot),
        processor.stats.applied,
        processor.stats.rejected,
    )
    return 0


def run_generate(args: argparse.Namespace, config: PaymentsEngineConfig) -> int:
    """Write a synthetic transaction stream as CSV."""
    seed = args.seed if args.seed is not None else config.seed
    try:
        generator = TransactionStreamGenerator(
            seed=seed,
            num_clients=args.clients,
            invalid_rate=args.invalid_rate,
        )
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc

    target = args.output if args.output is not None else sys.stdout
    count = write_transactions(generator.generate(args.transactions), target)
    logger.info("Generated %d transactions for %d clients", count, args.clients)
    return 0


def build_sink(output: OutputConfig, kafka: KafkaConfig, precision: int, target: Path | None) -> Any:
    """Create the sink selected by ``output.format``."""
    if output.format == "json":
        return JsonFileSink(output.json_output_dir, pretty=output.pretty_json, precision=precision)
    if output.format == "console":
        return ConsoleSink(pretty=output.pretty_json, precision=precision)
    if output.format == "kafka":
        return KafkaSink(kafka, precision=precision)
    return CsvSink(target, precision=precision)
