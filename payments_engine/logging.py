"""Logging setup for payments-engine.

Account output owns stdout, so every log record goes to stderr unless a
stream is given explicitly.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Attributes the processor attaches to rejection records via ``extra=``
CONTEXT_FIELDS = ("tx", "client", "outcome")

QUIET_LOGGERS = ("confluent_kafka", "faker")


def setup_logging(
    level: str = "WARNING",
    format_type: str = "standard",
    stream: IO[str] | None = None,
) -> None:
    """Install a single handler on the root logger.

    Parameters
    ----------
    level : str
        Level name. Unknown names fall back to WARNING, which shows
        rejected transactions and skipped rows but not per-run summaries.
    format_type : str
        ``"standard"`` for pipe-separated text, ``"json"`` for one JSON
        object per line.
    stream : IO[str] | None
        Destination, stderr by default.
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(fmt=STANDARD_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logging.getLogger("payments_engine").setLevel(log_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class JsonFormatter(logging.Formatter):
    """Render records as JSON, lifting transaction context to top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in CONTEXT_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def get_logger(name: str) -> logging.Logger:
    """Return the logger called ``name``."""
    return logging.getLogger(name)
