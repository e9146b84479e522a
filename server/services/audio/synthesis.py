# =============================================================================
# services/audio/synthesis.py
# =============================================================================

import asyncio
import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Optional

from core.exceptions import SynthesisUnsupported
from ..session.events import EventBus, Severity

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class Utterance:
    text: str
    language: str
    rate: float = 0.9
    utterance_id: str = field(default_factory=lambda: str(uuid.uuid4()))

class SynthesisEngine(ABC):
    """Text-to-speech capability; on_end is called when an utterance finishes"""

    @property
    @abstractmethod
    def available(self) -> bool:
        ...

    @abstractmethod
    def speak(self, utterance: Utterance, on_end: Callable[[Utterance], None]) -> None:
        ...

    @abstractmethod
    def cancel(self) -> None:
        ...

class SpeechOutput:
    """Single-utterance speech channel: a new request cancels the one playing"""

    def __init__(self, engine: Optional[SynthesisEngine], events: EventBus, rate: float = 0.9):
        self.engine = engine
        self.events = events
        self.rate = rate
        self._current: Optional[Utterance] = None
        self._done: Optional[asyncio.Future] = None

    @property
    def speaking(self) -> bool:
        return self._current is not None

    def speak(self, text: str, language_code: str) -> Optional[Utterance]:
        if not text:
            return None
        if self.engine is None or not self.engine.available:
            raise SynthesisUnsupported()

        self.cancel()
        utterance = Utterance(text=text, language=language_code, rate=self.rate)
        self._current = utterance
        self._done = asyncio.get_running_loop().create_future()

        self.engine.speak(utterance, self._on_end)
        logger.info(f"🔊 Speaking {len(text)} chars in {language_code}")
        self.events.notify("Playing translation", Severity.INFO)
        return utterance

    def _on_end(self, utterance: Utterance):
        # completions of cancelled utterances are stale
        if self._current is None or utterance.utterance_id != self._current.utterance_id:
            return
        self._finish()
        self.events.notify("Finished playing translation", Severity.INFO)

    def _finish(self):
        self._current = None
        if self._done and not self._done.done():
            self._done.set_result(None)

    def cancel(self):
        if self._current is None:
            return
        if self.engine is not None:
            self.engine.cancel()
        self._finish()

    async def wait_until_done(self):
        if self._done is not None:
            await self._done
