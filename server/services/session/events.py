# =============================================================================
# services/session/events.py
# =============================================================================

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

class Severity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"

class EventType(Enum):
    STATE = "state"
    NOTIFICATION = "notification"

@dataclass
class PipelineEvent:
    event_type: EventType
    content: Dict[str, Any]
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self):
        return {
            "type": self.event_type.value,
            **self.content,
            "timestamp": self.timestamp.isoformat()
        }

Subscriber = Callable[[PipelineEvent], None]

class EventBus:
    """Synchronous fan-out of state changes and user notifications"""

    def __init__(self):
        self._subscribers: List[Subscriber] = []

    def subscribe(self, subscriber: Subscriber):
        if subscriber not in self._subscribers:
            self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: Subscriber):
        if subscriber in self._subscribers:
            self._subscribers.remove(subscriber)

    def publish(self, event: PipelineEvent):
        for subscriber in list(self._subscribers):
            try:
                subscriber(event)
            except Exception as e:
                logger.error(f"❌ Event subscriber failed: {e}")

    def notify(self, message: str, severity=Severity.INFO):
        severity = Severity(severity)
        self.publish(PipelineEvent(
            EventType.NOTIFICATION,
            {"message": message, "severity": severity.value}
        ))

    def publish_state(self, session):
        self.publish(PipelineEvent(EventType.STATE, session.snapshot()))
