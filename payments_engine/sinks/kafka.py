"""Kafka sink publishing account snapshots."""

import json
import logging
from dataclasses import dataclass
from typing import Any, Iterable

from confluent_kafka import Producer

from payments_engine.config import KafkaConfig
from payments_engine.exceptions import SinkError
from payments_engine.models.base import DEFAULT_PRECISION
from payments_engine.sinks.serialization import to_dict

logger = logging.getLogger(__name__)


@dataclass
class ProducerStats:
    """Track producer delivery statistics."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        total = self.delivered + self.failed
        return self.delivered / total if total > 0 else 0.0


class KafkaSink:
    """Output account snapshots to Kafka, one message per client.

    Messages are keyed by client id so every update for a client lands on
    the same partition. The topic is ``<topic_prefix>.<entity_type>``.
    """

    def __init__(self, config: KafkaConfig | str, precision: int = DEFAULT_PRECISION) -> None:
        """Initialize Kafka sink.

        Parameters
        ----------
        config : KafkaConfig | str
            Producer configuration or bootstrap servers string.
        precision : int
            Decimal places written for every amount.
        """
        if isinstance(config, str):
            config = KafkaConfig(bootstrap_servers=config)

        self.config = config
        self.precision = precision
        self.producer = Producer(config.to_dict())
        self.stats = ProducerStats()

    def topic_for(self, entity_type: str) -> str:
        return f"{self.config.topic_prefix}.{entity_type}"

    def _delivery_callback(self, err: Any, msg: Any) -> None:
        """Handle delivery reports."""
        if err:
            self.stats.failed += 1
            logger.error("Delivery failed: %s", err)
        else:
            self.stats.delivered += 1
            logger.debug("Delivered to %s[%d]@%d", msg.topic(), msg.partition(), msg.offset())

    def send(self, topic: str, record: Any) -> None:
        """Send a single snapshot to a Kafka topic."""
        data = to_dict(record, self.precision)
        value = json.dumps(data, ensure_ascii=False).encode("utf-8")
        key = data.get("client")

        self.producer.produce(
            topic=topic,
            key=str(key).encode("utf-8") if key is not None else None,
            value=value,
            callback=self._delivery_callback,
        )
        self.stats.sent += 1
        self.producer.poll(0)

    def write_batch(self, entity_type: str, records: Iterable[Any]) -> None:
        """Write a batch of snapshots and wait for delivery."""
        topic = self.topic_for(entity_type)
        for record in records:
            self.send(topic, record)

        self.flush()
        logger.info(
            "Batch complete on %s: sent=%d, delivered=%d, failed=%d",
            topic,
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )
        if self.stats.failed:
            raise SinkError(f"{self.stats.failed} messages failed delivery to {topic}")

    def flush(self, timeout: float = 30.0) -> None:
        """Flush pending messages."""
        remaining = self.producer.flush(timeout)
        if remaining:
            raise SinkError(f"{remaining} messages still queued after {timeout}s")

    def close(self) -> None:
        """Flush and close the producer."""
        self.flush()
        logger.info(
            "Kafka sink closed: sent=%d, delivered=%d, failed=%d, success_rate=%.1f%%",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
            self.stats.success_rate * 100,
        )
