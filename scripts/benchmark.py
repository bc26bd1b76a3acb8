#!/usr/bin/env python3
"""Benchmark stream generation, CSV parsing and transaction processing.

Measures:
- Synthetic stream generation rate
- CSV write + parse rate
- Processor throughput (transactions/sec) and outcome breakdown
- Memory usage at the chosen scale

Usage:
    python scripts/benchmark.py
    python scripts/benchmark.py --scale 1000000 --clients 5000
"""

import argparse
import io
import logging
import sys
import time
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from payments_engine.generators import TransactionStreamGenerator
from payments_engine.models import Outcome
from payments_engine.processor import TransactionProcessor
from payments_engine.sources import read_transactions, write_transactions

logging.basicConfig(
    level=logging.ERROR,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


def get_memory_mb() -> float:
    """Get peak process memory usage in MB."""
    try:
        import resource
        usage = resource.getrusage(resource.RUSAGE_SELF)
        return usage.ru_maxrss / 1024  # Linux reports in KiB
    except ImportError:
        return 0.0


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Benchmark payments-engine performance")
    parser.add_argument("--scale", type=int, default=100_000, help="Number of transactions (default: 100000)")
    parser.add_argument("--clients", type=int, default=1000, help="Number of clients (default: 1000)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    print("=" * 60)
    print(f"  payments-engine Benchmark  |  scale={args.scale:,}  clients={args.clients:,}")
    print("=" * 60)

    print("\n[1] Stream Generation")
    start = time.perf_counter()
    generator = TransactionStreamGenerator(seed=args.seed, num_clients=args.clients)
    transactions = list(generator.generate(args.scale))
    elapsed = time.perf_counter() - start
    print(f"  Generated {len(transactions):>10,} in {elapsed:.2f}s  ({len(transactions) / max(elapsed, 0.001):,.0f}/sec)")

    print("\n[2] CSV Round Trip")
    buffer = io.StringIO()
    start = time.perf_counter()
    write_transactions(transactions, buffer)
    buffer.seek(0)
    parsed = list(read_transactions(buffer))
    elapsed = time.perf_counter() - start
    print(f"  Parsed    {len(parsed):>10,} in {elapsed:.2f}s  ({len(parsed) / max(elapsed, 0.001):,.0f}/sec)")

    print("\n[3] Processing")
    mem_before = get_memory_mb()
    processor = TransactionProcessor()
    start = time.perf_counter()
    snapshot = processor.process_all(parsed)
    elapsed = time.perf_counter() - start
    stats = processor.stats
    print(f"  Processed {stats.processed:>10,} in {elapsed:.2f}s  ({stats.processed / max(elapsed, 0.001):,.0f}/sec)")
    print(f"  Applied   {stats.applied:>10,}")
    for outcome in Outcome:
        count = stats.rejected_by(outcome)
        if count:
            print(f"    {outcome.value:<24} {count:>8,}")
    locked = sum(1 for account in snapshot if account.locked)
    print(f"  Accounts  {len(snapshot):>10,}  (locked: {locked:,})")
    print(f"\n  Memory: {get_memory_mb():.1f} MB (delta: +{get_memory_mb() - mem_before:.1f} MB)")

    print("\n" + "=" * 60)
    print("  Benchmark complete")
    print("=" * 60)


if __name__ == "__main__":
    main()
