# =============================================================================
# services/session/timer.py
# =============================================================================

import asyncio
import logging
from enum import Enum
from typing import Optional

from .events import EventBus, EventType, PipelineEvent, Severity
from .state import Session

logger = logging.getLogger(__name__)

class ActivitySignal(Enum):
    POINTER_DOWN = "pointerdown"
    KEY_PRESS = "keypress"
    SCROLL = "scroll"
    TOUCH_START = "touchstart"

class SessionTimer:
    """
    Purges transcript and translations after a period of inactivity.

    The deadline is armed on construction and re-armed by user interaction
    signals and by every published state change. Call close() when the
    owning pipeline is discarded.
    """

    def __init__(self, session: Session, events: EventBus, timeout_seconds: float = 300.0,
                 loop: Optional[asyncio.AbstractEventLoop] = None):
        self.session = session
        self.events = events
        self.timeout_seconds = timeout_seconds
        self._loop = loop or asyncio.get_running_loop()
        self._handle: Optional[asyncio.TimerHandle] = None
        self._closed = False

        self.events.subscribe(self._on_event)
        self.register_activity()

    @property
    def deadline(self) -> Optional[float]:
        """Loop time at which the purge fires, None when disarmed"""
        return self._handle.when() if self._handle else None

    @property
    def closed(self) -> bool:
        return self._closed

    def handle_signal(self, signal: str) -> bool:
        """Re-arm for qualifying interaction signals; returns whether it qualified"""
        try:
            ActivitySignal(signal)
        except ValueError:
            return False
        self.register_activity()
        return True

    def register_activity(self):
        if self._closed:
            return
        if self._handle:
            self._handle.cancel()
        self.session.touch()
        self._handle = self._loop.call_later(self.timeout_seconds, self._expire)

    def _on_event(self, event: PipelineEvent):
        if event.event_type == EventType.STATE:
            self.register_activity()

    def _expire(self):
        self._handle = None
        if not self.session.has_content:
            return

        self.session.clear()
        logger.info("🔒 Session data purged after inactivity")
        self.events.publish_state(self.session)
        self.events.notify("Patient data cleared for security", Severity.INFO)

    def close(self):
        if self._closed:
            return
        self._closed = True
        if self._handle:
            self._handle.cancel()
            self._handle = None
        self.events.unsubscribe(self._on_event)
