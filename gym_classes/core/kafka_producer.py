# gym_classes/core/kafka_producer.py

import json
import logging
import threading
from typing import Optional

from kafka import KafkaProducer
from kafka.errors import KafkaError

from gym_classes.core.config import settings

logger = logging.getLogger(__name__)

_producer: Optional[KafkaProducer] = None
_producer_lock = threading.Lock()


def _build_producer() -> KafkaProducer:
    return KafkaProducer(
        bootstrap_servers=settings.KAFKA_BOOTSTRAP_SERVERS,
        value_serializer=lambda v: json.dumps(v, default=str).encode("utf-8"),
        # Fail fast on connection issues so a request is never held up by Kafka
        request_timeout_ms=5000,
    )


def get_kafka_singleton() -> Optional[KafkaProducer]:
    """
    Process-wide producer, created on first use.

    Returns None when Kafka is disabled or unreachable; callers treat
    publishing as best effort.
    """
    global _producer

    if not settings.KAFKA_ENABLED:
        return None

    if _producer is None:
        with _producer_lock:
            if _producer is None:
                try:
                    _producer = _build_producer()
                except KafkaError as e:
                    logger.warning(f"Kafka producer unavailable: {e}")
                    return None
    return _producer


def close_kafka_producer() -> None:
    global _producer
    if _producer is not None:
        _producer.flush(timeout=5)
        _producer.close()
        _producer = None
