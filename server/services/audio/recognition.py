# =============================================================================
# services/audio/recognition.py
# =============================================================================

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Set

from core.exceptions import EngineError, NotSupportedError, PermissionDenied
from ..medical_intelligence.terminology import MedicalTermEnhancer
from ..session.events import EventBus, Severity
from ..session.state import Session
from ..text.sanitizer import sanitize
from ..translation.languages import resolve_base
from ..translation.translator import TranslationService

logger = logging.getLogger(__name__)

PERMISSION_DENIED_ERRORS = {"not-allowed"}

@dataclass(frozen=True)
class RecognitionResult:
    """One entry of a recognition result batch"""
    transcript: str
    is_final: bool = False

class RecognitionEngine(ABC):
    """
    Continuous speech recognition with interim results.

    start() configures the stream for the given language tag; the engine
    reports back through the listener's on_start, on_result, on_error and
    on_end callbacks, all invoked on the event loop thread.
    """

    @property
    @abstractmethod
    def available(self) -> bool:
        ...

    @abstractmethod
    def start(self, language_tag: str, listener: "RecognitionStream") -> None:
        """Raise EngineError if the stream cannot be started"""

    @abstractmethod
    def stop(self) -> None:
        ...

class CaptureState(Enum):
    IDLE = "idle"
    STARTING = "starting"
    LISTENING = "listening"
    STOPPING = "stopping"

class RecognitionStream:
    """
    Listener handed to the engine for one start() call.

    Callbacks reach the capture session only while this is its current
    stream, so a late end or error from a stopped stream cannot act on
    the one started after it.
    """

    def __init__(self, capture: "SpeechCaptureSession", stream_id: int):
        self.capture = capture
        self.stream_id = stream_id

    @property
    def current(self) -> bool:
        return self.capture.stream is self

    def on_start(self):
        if self.current:
            self.capture.on_start()

    def on_result(self, results: Iterable[RecognitionResult]):
        if self.current:
            self.capture.on_result(results)

    def on_error(self, kind: str):
        if self.current:
            self.capture.on_error(kind)

    def on_end(self):
        if self.current:
            self.capture.on_end()
        else:
            logger.info(f"🎤 Ignoring end of stale stream {self.stream_id}")

class SpeechCaptureSession:
    """
    Drives the capture pipeline from recognition callbacks.

    Each final result is sanitized, enhanced and appended to the transcript
    immediately; its translation runs as a separate task and is appended
    whenever it resolves. stop() ignores further recognition events but
    leaves dispatched translations running.
    """

    def __init__(self, session: Session, engine: Optional[RecognitionEngine],
                 translator: TranslationService, events: EventBus,
                 enhancer: Optional[MedicalTermEnhancer] = None):
        self.session = session
        self.engine = engine
        self.translator = translator
        self.events = events
        self.enhancer = enhancer or MedicalTermEnhancer()

        self.state = CaptureState.IDLE
        self.last_error: Optional[Exception] = None
        self._language_tag: Optional[str] = None
        self.stream: Optional[RecognitionStream] = None
        self._stream_count = 0
        self._pending: Set[asyncio.Task] = set()

    @property
    def is_listening(self) -> bool:
        return self.state == CaptureState.LISTENING

    @property
    def pending_translations(self) -> int:
        return len(self._pending)

    def start(self):
        """Request a recognition stream in the session's source language"""
        if self.state != CaptureState.IDLE:
            logger.info(f"🎤 start() ignored while {self.state.value}")
            return

        if self.engine is None or not self.engine.available:
            raise NotSupportedError("Speech recognition is not supported on this client.", "recognition")

        self._language_tag = self.session.source_language_tag
        self._stream_count += 1
        self.stream = RecognitionStream(self, self._stream_count)
        self.state = CaptureState.STARTING
        try:
            self.engine.start(self._language_tag, self.stream)
        except EngineError:
            self.stream = None
            self.state = CaptureState.IDLE
            raise

        logger.info(f"🎤 Recognition requested for {self._language_tag}")

    def stop(self):
        if self.state == CaptureState.IDLE:
            return

        self.state = CaptureState.STOPPING
        try:
            self.engine.stop()
        finally:
            self._become_idle()
        self.events.notify("Stopped listening", Severity.INFO)

    def _become_idle(self):
        self.stream = None
        self.state = CaptureState.IDLE
        self.session.is_listening = False
        self.events.publish_state(self.session)

    # ------------------------------------------------------------------
    # Engine callbacks
    # ------------------------------------------------------------------

    def on_start(self):
        if self.state != CaptureState.STARTING:
            return
        self.state = CaptureState.LISTENING
        self.session.is_listening = True
        self.events.publish_state(self.session)
        self.events.notify("Listening...", Severity.INFO)

    def on_result(self, results: Iterable[RecognitionResult]):
        if self.state != CaptureState.LISTENING:
            return
        for result in results:
            if result.is_final:
                self._commit(result.transcript)

    def on_error(self, kind: str):
        if self.state == CaptureState.IDLE:
            return

        if kind in PERMISSION_DENIED_ERRORS:
            error = PermissionDenied()
        else:
            error = EngineError(f"Error: {kind}", kind)
        self.last_error = error
        logger.error(f"❌ Speech recognition error: {kind}")

        self.state = CaptureState.STOPPING
        try:
            self.engine.stop()
        finally:
            self._become_idle()
        self.events.notify(error.message, Severity.ERROR)

    def on_end(self):
        if self.state == CaptureState.IDLE:
            return
        self._become_idle()
        self.events.notify("Stopped listening", Severity.INFO)

    # ------------------------------------------------------------------
    # Commit and translate
    # ------------------------------------------------------------------

    def _commit(self, transcript: str):
        clean = sanitize(transcript)
        if not clean:
            return

        enhanced = self.enhancer.enhance(clean)
        self.session.append_transcript(enhanced)
        self.events.publish_state(self.session)

        source_lang = resolve_base(self._language_tag)
        target_lang = self.session.target_language_code
        task = asyncio.get_running_loop().create_task(
            self._translate_and_append(enhanced, source_lang, target_lang)
        )
        self._pending.add(task)
        task.add_done_callback(self._on_translation_done)

    def _on_translation_done(self, task: asyncio.Task):
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"❌ Translation task failed: {error!r}")

    async def _translate_and_append(self, text: str, source_lang: str, target_lang: str):
        result = await self.translator.translate(text, source_lang, target_lang, notify=self.events.notify)
        self.session.append_translation(result.text)
        logger.info(f"📝 Appended {result.provenance.value} translation ({source_lang}->{target_lang})")
        self.events.publish_state(self.session)

    async def drain(self):
        """Wait until every dispatched translation has been appended"""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def teardown(self):
        """Stop recognition and cancel translations that have not resolved"""
        self.stop()
        for task in list(self._pending):
            task.cancel()
