"""Configuration management for payments-engine."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from payments_engine.exceptions import ConfigurationError
from payments_engine.models.base import DEFAULT_PRECISION
from payments_engine.models.enums import LockedAccountPolicy

OUTPUT_FORMATS = ("csv", "json", "console", "kafka")
LOG_FORMATS = ("standard", "json")


@dataclass
class EngineConfig:
    """Processing rules for the core engine."""

    locked_policy: LockedAccountPolicy = LockedAccountPolicy.REJECT
    precision: int = DEFAULT_PRECISION

    def __post_init__(self) -> None:
        if self.precision < 0:
            raise ConfigurationError(f"Precision must be non-negative, got {self.precision}")


@dataclass
class CsvConfig:
    """CSV input options."""

    delimiter: str = ","


@dataclass
class KafkaConfig:
    """Kafka producer configuration."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    batch_size: int = 16384
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3
    topic_prefix: str = "payments"

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "batch.size": self.batch_size,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class OutputConfig:
    """Output configuration."""

    format: str = "csv"
    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False

    def __post_init__(self) -> None:
        if self.format not in OUTPUT_FORMATS:
            raise ConfigurationError(f"Unknown output format: {self.format}")


@dataclass
class PaymentsEngineConfig:
    """Main configuration for payments-engine."""

    engine: EngineConfig = field(default_factory=EngineConfig)
    csv: CsvConfig = field(default_factory=CsvConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    seed: int | None = None
    log_level: str = "WARNING"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "PaymentsEngineConfig":
        """Create config from environment variables."""
        import os

        policy = os.getenv("LOCKED_ACCOUNT_POLICY", LockedAccountPolicy.REJECT.value).lower()
        try:
            locked_policy = LockedAccountPolicy(policy)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown locked account policy: {policy}") from exc

        engine = EngineConfig(
            locked_policy=locked_policy,
            precision=_env_int("AMOUNT_PRECISION", DEFAULT_PRECISION),
        )

        csv = CsvConfig(delimiter=os.getenv("CSV_DELIMITER", ","))

        output = OutputConfig(
            format=os.getenv("OUTPUT_FORMAT", "csv").lower(),
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
            topic_prefix=os.getenv("TOPIC_PREFIX", "payments"),
        )

        log_format = os.getenv("LOG_FORMAT", "standard").lower()
        if log_format not in LOG_FORMATS:
            raise ConfigurationError(f"Unknown log format: {log_format}")

        return cls(
            engine=engine,
            csv=csv,
            output=output,
            kafka=kafka,
            seed=_env_int("SEED", None),
            log_level=os.getenv("LOG_LEVEL", "WARNING"),
            log_format=log_format,
        )


def _env_int(name: str, default: int | None) -> int | None:
    """Read an integer environment variable."""
    import os

    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
