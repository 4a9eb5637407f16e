# gym_classes/utils/kafka_helpers.py
"""
Kafka helper functions for publishing class scheduling events.

The notification dispatcher consumes these to message students; this
service never sends messages itself.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

from gym_classes.core.kafka_producer import get_kafka_singleton
from gym_classes.utils.clock import utcnow

logger = logging.getLogger(__name__)

# Kafka Topics
TOPIC_CLASS_WAITLIST_EVENTS = "class.waitlist.events.v1"

# Event types
WAITLIST_JOINED = "WAITLIST_JOINED"
WAITLIST_PROMOTED = "WAITLIST_PROMOTED"
WAITLIST_NOTIFIED = "WAITLIST_NOTIFIED"
WAITLIST_EXPIRED = "WAITLIST_EXPIRED"
ENROLLMENT_CANCELLED = "ENROLLMENT_CANCELLED"
SESSION_CANCELLED = "SESSION_CANCELLED"


@dataclass
class ClassEvent:
    event_type: str
    session_id: str
    student_id: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def to_message(self) -> Dict[str, Any]:
        return {
            "type": self.event_type,
            "sessionId": self.session_id,
            "studentId": self.student_id,
            "data": self.data,
            "timestamp": utcnow().isoformat(),
        }


def publish_class_events(events: Iterable[ClassEvent]) -> int:
    """
    Publish events collected during a committed operation.

    Best effort: a failure is logged and never undoes the operation that
    produced the event.

    Returns:
        int: number of events handed to the producer
    """
    events = list(events)
    if not events:
        return 0

    producer = get_kafka_singleton()
    if producer is None:
        logger.debug(f"Kafka producer unavailable, skipping {len(events)} class event(s)")
        return 0

    sent = 0
    for event in events:
        try:
            producer.send(
                TOPIC_CLASS_WAITLIST_EVENTS,
                key=event.session_id.encode("utf-8"),
                value=event.to_message(),
            )
            sent += 1
        except Exception as e:
            logger.error(
                f"Failed to publish {event.event_type} for session {event.session_id}: {e}",
                exc_info=True,
            )
    return sent
