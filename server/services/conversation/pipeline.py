# =============================================================================
# services/conversation/pipeline.py
# =============================================================================

import logging
from abc import ABC, abstractmethod
from typing import Optional

from core.config import Settings, settings as default_settings
from core.exceptions import ClipboardError, EngineError, NotSupportedError
from ..audio.recognition import RecognitionEngine, SpeechCaptureSession
from ..audio.synthesis import SpeechOutput, SynthesisEngine
from ..session.events import EventBus, Severity
from ..session.state import Session
from ..session.timer import SessionTimer
from ..translation.translator import TranslationService

logger = logging.getLogger(__name__)

class Clipboard(ABC):
    """Write-only clipboard capability"""

    @property
    @abstractmethod
    def available(self) -> bool:
        ...

    @abstractmethod
    async def write_text(self, text: str) -> None:
        """Raise ClipboardError when the write fails"""

class ConversationPipeline:
    """
    Capture-to-translation pipeline for one client.

    Exposes the user intents (start, stop, clear, speak, copy and the two
    language selections) and reports everything through the EventBus:
    state snapshots after each change and notifications for the user.
    Must be created inside a running event loop and closed with close().
    """

    def __init__(self, recognition: Optional[RecognitionEngine] = None,
                 synthesis: Optional[SynthesisEngine] = None,
                 clipboard: Optional[Clipboard] = None,
                 translation_service: Optional[TranslationService] = None,
                 settings: Settings = default_settings,
                 events: Optional[EventBus] = None):
        self.settings = settings
        self.events = events or EventBus()
        self.clipboard = clipboard

        self._owns_translation_service = translation_service is None
        self.translation_service = translation_service or TranslationService(settings)

        self.session = Session(
            source_language_tag=settings.default_source_language_tag,
            target_language_code=settings.default_target_language_code,
            max_segments=settings.max_session_segments
        )
        self.capture = SpeechCaptureSession(
            self.session, recognition, self.translation_service, self.events
        )
        self.output = SpeechOutput(synthesis, self.events, rate=settings.speech_rate)
        self.timer = SessionTimer(
            self.session, self.events, timeout_seconds=settings.inactivity_timeout_seconds
        )
        self._closed = False

        logger.info(f"🏥 Pipeline ready: {self.session.source_language_tag} -> {self.session.target_language_code}")

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def start(self):
        try:
            self.capture.start()
        except NotSupportedError as e:
            logger.warning(f"⚠️ {e.message}")
            self.events.notify(e.message, Severity.ERROR)
        except EngineError as e:
            logger.error(f"❌ Error starting speech recognition: {e.message}")
            self.events.notify("Error starting speech recognition", Severity.ERROR)

    def stop(self):
        self.capture.stop()

    def clear(self):
        self.session.clear()
        self.events.publish_state(self.session)
        self.events.notify("Text cleared", Severity.INFO)

    def speak(self):
        text = self.session.translation_text
        if not text:
            return
        try:
            self.output.speak(text, self.session.target_language_code)
        except NotSupportedError as e:
            self.events.notify(e.message, Severity.ERROR)

    async def copy(self):
        text = self.session.translation_text
        if not text:
            return
        try:
            if self.clipboard is None or not self.clipboard.available:
                raise ClipboardError("Clipboard is not available on this client")
            await self.clipboard.write_text(text)
        except ClipboardError as e:
            logger.warning(f"⚠️ Failed to copy text: {e.message}")
            self.events.notify("Failed to copy text", Severity.ERROR)
            return
        self.events.notify("Translation copied to clipboard", Severity.SUCCESS)

    def select_source_language(self, tag: str):
        """Recognition tag used by the next start()"""
        if not tag:
            return
        self.session.source_language_tag = tag
        self.events.publish_state(self.session)

    def select_target_language(self, code: str):
        if not code:
            return
        self.session.target_language_code = code.lower()
        self.events.publish_state(self.session)

    def handle_activity(self, signal: str) -> bool:
        return self.timer.handle_signal(signal)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_listening(self) -> bool:
        return self.session.is_listening

    async def drain(self):
        """Wait for in-flight translations to land"""
        await self.capture.drain()

    async def close(self):
        """Tear down recognition, speech, timer and owned HTTP resources"""
        if self._closed:
            return
        self._closed = True

        self.capture.teardown()
        self.output.cancel()
        self.timer.close()
        if self._owns_translation_service:
            await self.translation_service.aclose()
        logger.info("🏁 Pipeline closed")
