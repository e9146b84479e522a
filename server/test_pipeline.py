# test_pipeline.py

import asyncio

import pytest

from conftest import (
    FakeClipboard,
    FakeRecognitionEngine,
    FakeSynthesisEngine,
    MyMemoryStub,
    make_translator,
    notifications
)
from core.config import Settings
from services.conversation.pipeline import ConversationPipeline
from services.session.events import EventType

@pytest.fixture
async def build(test_settings):
    pipelines = []

    def _build(stub=None, settings=None, **capabilities):
        settings = settings or test_settings
        translator = make_translator(stub or MyMemoryStub(), settings)
        pipeline = ConversationPipeline(translation_service=translator, settings=settings, **capabilities)
        log = []
        pipeline.events.subscribe(log.append)
        pipelines.append(pipeline)
        return pipeline, log

    yield _build
    for pipeline in pipelines:
        await pipeline.close()

def listen(pipeline, engine):
    pipeline.start()
    engine.confirm_start()

async def test_headache_and_fever_with_remote_unreachable(build, unreachable):
    engine = FakeRecognitionEngine()
    pipeline, log = build(unreachable, recognition=engine)
    pipeline.select_target_language("es")

    listen(pipeline, engine)
    engine.final("I have a headache and fever")
    await pipeline.drain()

    assert pipeline.session.transcript == ["I have a cephalalgia and pyrexia"]
    assert pipeline.session.translated_text == [
        "I have a cephalalgia and pyrexia [Would be translated to Spanish]"
    ]
    assert ("Translation service unavailable. Using fallback.", "warning") in notifications(log)

async def test_counts_converge_once_translations_settle(build):
    engine = FakeRecognitionEngine()
    stub = MyMemoryStub({"pyrexia": "pirexia", "I need help": "Necesito ayuda"})
    pipeline, _ = build(stub, recognition=engine)
    pipeline.select_target_language("es")
    listen(pipeline, engine)

    engine.final("fever")
    engine.final("I need help")
    await pipeline.drain()

    assert len(pipeline.session.transcript) == len(pipeline.session.translated_text) == 2
    assert sorted(pipeline.session.translated_text) == ["Necesito ayuda", "pirexia"]

async def test_state_events_track_session(build):
    engine = FakeRecognitionEngine()
    pipeline, log = build(recognition=engine)
    listen(pipeline, engine)

    engine.final("hello")
    await pipeline.drain()

    states = [e.content for e in log if e.event_type == EventType.STATE]
    assert states[-1]["is_listening"] is True
    assert states[-1]["transcript"] == ["hello"]
    assert states[-1]["translated_text"] == ["hello"]

async def test_start_without_recognition_reports_error(build):
    pipeline, log = build()

    pipeline.start()

    assert not pipeline.is_listening
    assert notifications(log) == [("Speech recognition is not supported on this client.", "error")]

async def test_start_failure_reports_error(build):
    pipeline, log = build(recognition=FakeRecognitionEngine(fail_on_start=True))

    pipeline.start()

    assert not pipeline.is_listening
    assert notifications(log) == [("Error starting speech recognition", "error")]

async def test_stop_turns_listening_off(build):
    engine = FakeRecognitionEngine()
    pipeline, log = build(recognition=engine)
    listen(pipeline, engine)

    pipeline.stop()

    assert not pipeline.is_listening
    assert engine.stop_calls == 1
    assert notifications(log)[-1] == ("Stopped listening", "info")

async def test_clear_empties_session(build):
    engine = FakeRecognitionEngine()
    pipeline, log = build(recognition=engine)
    listen(pipeline, engine)
    engine.final("pain")
    await pipeline.drain()

    pipeline.clear()

    assert pipeline.session.transcript == []
    assert pipeline.session.translated_text == []
    assert notifications(log)[-1] == ("Text cleared", "info")

async def test_speak_uses_joined_translation_and_target(build, test_settings):
    recognition = FakeRecognitionEngine()
    synthesis = FakeSynthesisEngine()
    stub = MyMemoryStub({"one": "uno", "two": "dos"})
    pipeline, log = build(stub, recognition=recognition, synthesis=synthesis)
    pipeline.select_target_language("ES")
    listen(pipeline, recognition)
    recognition.final("one")
    await pipeline.drain()
    recognition.final("two")
    await pipeline.drain()

    pipeline.speak()

    utterance = synthesis.spoken[-1]
    assert utterance.text == "uno dos"
    assert utterance.language == "es"
    assert utterance.rate == test_settings.speech_rate
    assert notifications(log)[-1] == ("Playing translation", "info")

    synthesis.finish(utterance)
    assert notifications(log)[-1] == ("Finished playing translation", "info")

async def test_speak_is_silent_without_translation(build):
    synthesis = FakeSynthesisEngine()
    pipeline, log = build(synthesis=synthesis)

    pipeline.speak()

    assert synthesis.spoken == []
    assert notifications(log) == []

async def test_speak_without_synthesis_reports_error(build):
    pipeline, log = build()
    pipeline.session.append_translation("hola")

    pipeline.speak()

    assert notifications(log) == [("Speech synthesis is not supported on this client.", "error")]

async def test_copy_writes_translation(build):
    clipboard = FakeClipboard()
    pipeline, log = build(clipboard=clipboard)
    pipeline.session.append_translation("hola")
    pipeline.session.append_translation("mundo")

    await pipeline.copy()

    assert clipboard.written == ["hola mundo"]
    assert notifications(log) == [("Translation copied to clipboard", "success")]

@pytest.mark.parametrize("clipboard", [None, FakeClipboard(available=False), FakeClipboard(fail=True)])
async def test_copy_failures_are_reported(build, clipboard):
    pipeline, log = build(clipboard=clipboard)
    pipeline.session.append_translation("hola")

    await pipeline.copy()

    assert notifications(log) == [("Failed to copy text", "error")]

async def test_copy_without_translation_does_nothing(build):
    clipboard = FakeClipboard()
    pipeline, log = build(clipboard=clipboard)

    await pipeline.copy()

    assert clipboard.written == []
    assert log == []

async def test_source_selection_applies_on_next_start(build):
    engine = FakeRecognitionEngine()
    pipeline, _ = build(recognition=engine)
    listen(pipeline, engine)

    pipeline.select_source_language("es-ES")
    pipeline.stop()
    listen(pipeline, engine)

    assert engine.started_with == ["en-US", "es-ES"]

async def test_segment_cap_keeps_newest(build, test_settings):
    engine = FakeRecognitionEngine()
    settings = Settings(translation_api_url=test_settings.translation_api_url, max_session_segments=2)
    pipeline, _ = build(settings=settings, recognition=engine)
    listen(pipeline, engine)

    for text in ("one", "two", "three"):
        engine.final(text)
    await pipeline.drain()

    assert pipeline.session.transcript == ["two", "three"]
    assert len(pipeline.session.translated_text) == 2

async def test_inactivity_purge_through_pipeline(build, test_settings):
    engine = FakeRecognitionEngine()
    settings = Settings(translation_api_url=test_settings.translation_api_url, inactivity_timeout_seconds=0.2)
    pipeline, log = build(settings=settings, recognition=engine)
    listen(pipeline, engine)
    engine.final("fever")
    await pipeline.drain()

    await asyncio.sleep(0.1)
    assert pipeline.handle_activity("touchstart")
    await asyncio.sleep(0.15)
    assert pipeline.session.transcript == ["pyrexia"]

    await asyncio.sleep(0.2)
    assert pipeline.session.transcript == []
    assert ("Patient data cleared for security", "info") in notifications(log)

async def test_close_tears_everything_down(build):
    engine = FakeRecognitionEngine()
    pipeline, _ = build(recognition=engine)
    listen(pipeline, engine)

    await pipeline.close()
    await pipeline.close()

    assert not pipeline.is_listening
    assert engine.stop_calls == 1
    assert pipeline.timer.closed
