# conftest.py - shared fixtures and in-memory capability fakes

import asyncio
from typing import Callable, Dict, List, Optional

import httpx
import pytest

from core.config import Settings
from core.exceptions import ClipboardError, EngineError
from services.audio.recognition import RecognitionEngine, RecognitionResult
from services.audio.synthesis import SynthesisEngine, Utterance
from services.conversation.pipeline import Clipboard
from services.session.events import EventBus, EventType, PipelineEvent
from services.translation.translator import TranslationService

class FakeRecognitionEngine(RecognitionEngine):

    def __init__(self, available: bool = True, fail_on_start: bool = False):
        self._available = available
        self.fail_on_start = fail_on_start
        self.listener = None
        self.started_with: List[str] = []
        self.stop_calls = 0

    @property
    def available(self) -> bool:
        return self._available

    def start(self, language_tag, listener):
        if self.fail_on_start:
            raise EngineError("Microphone busy", "audio-capture")
        self.listener = listener
        self.started_with.append(language_tag)

    def stop(self):
        self.stop_calls += 1

    def confirm_start(self):
        self.listener.on_start()

    def emit(self, *results):
        self.listener.on_result([RecognitionResult(text, is_final) for text, is_final in results])

    def final(self, text: str):
        self.emit((text, True))

    def fail(self, kind: str):
        self.listener.on_error(kind)

    def end(self):
        self.listener.on_end()

class FakeSynthesisEngine(SynthesisEngine):

    def __init__(self, available: bool = True):
        self._available = available
        self.spoken: List[Utterance] = []
        self.cancel_calls = 0
        self._callbacks: Dict[str, Callable] = {}

    @property
    def available(self) -> bool:
        return self._available

    def speak(self, utterance, on_end):
        self.spoken.append(utterance)
        self._callbacks[utterance.utterance_id] = on_end

    def cancel(self):
        self.cancel_calls += 1

    def finish(self, utterance: Utterance):
        self._callbacks.pop(utterance.utterance_id)(utterance)

class FakeClipboard(Clipboard):

    def __init__(self, available: bool = True, fail: bool = False):
        self._available = available
        self.fail = fail
        self.written: List[str] = []

    @property
    def available(self) -> bool:
        return self._available

    async def write_text(self, text: str) -> None:
        if self.fail:
            raise ClipboardError("Permission denied by client")
        self.written.append(text)

class MyMemoryStub:
    """httpx handler standing in for the MyMemory endpoint"""

    def __init__(self, translations: Optional[Dict[str, str]] = None, status_code: int = 200,
                 response_status=200, error: Optional[Exception] = None):
        self.translations = translations or {}
        self.status_code = status_code
        self.response_status = response_status
        self.error = error
        self.requests: List[httpx.Request] = []
        self.gates: Dict[str, asyncio.Event] = {}

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        query = request.url.params["q"]
        if query in self.gates:
            await self.gates[query].wait()
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json={
            "responseStatus": self.response_status,
            "responseData": {"translatedText": self.translations.get(query, "")}
        })

def make_translator(handler, settings: Settings) -> TranslationService:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return TranslationService(settings, client=client)

def notifications(events: List[PipelineEvent]) -> List[tuple]:
    return [
        (event.content["message"], event.content["severity"])
        for event in events if event.event_type == EventType.NOTIFICATION
    ]

@pytest.fixture
def test_settings():
    return Settings(
        translation_api_url="https://translate.test/get",
        translation_contact_email="clinic@example.org",
        inactivity_timeout_seconds=300
    )

@pytest.fixture
def bus():
    return EventBus()

@pytest.fixture
def event_log(bus):
    log: List[PipelineEvent] = []
    bus.subscribe(log.append)
    return log

@pytest.fixture
def unreachable():
    return MyMemoryStub(error=httpx.ConnectError("Connection refused"))
