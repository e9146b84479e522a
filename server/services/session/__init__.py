# =============================================================================
# services/session/__init__.py
# =============================================================================

"""
Session Management Services

In-memory session state and its privacy lifecycle:
- Transcript and translation segments
- State change and notification events
- Inactivity purge
"""

from .state import Session
from .events import EventBus, EventType, PipelineEvent, Severity
from .timer import ActivitySignal, SessionTimer

__all__ = [
    "Session",
    "EventBus",
    "EventType",
    "PipelineEvent",
    "Severity",
    "ActivitySignal",
    "SessionTimer"
]
