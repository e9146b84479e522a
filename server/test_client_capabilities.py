# test_client_capabilities.py

from services.audio.recognition import RecognitionResult
from services.audio.synthesis import Utterance
from services.conversation.client_capabilities import (
    ClientChannel,
    ClientRecognitionEngine,
    ClientSynthesisEngine
)

class RecordingListener:

    def __init__(self):
        self.calls = []

    def on_start(self):
        self.calls.append("start")

    def on_result(self, results):
        self.calls.append(("result", [r.transcript for r in results]))

    def on_error(self, kind):
        self.calls.append(("error", kind))

    def on_end(self):
        self.calls.append("end")

def sent(channel):
    messages = []
    while not channel.outbox.empty():
        messages.append(channel.outbox.get_nowait())
    return messages

async def test_each_start_opens_a_new_stream():
    channel = ClientChannel()
    engine = ClientRecognitionEngine(channel, available=True)

    engine.start("en-US", RecordingListener())
    first_id = engine.stream_id
    engine.stop()
    engine.start("es-ES", RecordingListener())

    start, stop, restart = sent(channel)
    assert start["stream_id"] == first_id
    assert stop == {"type": "recognition_stop", "stream_id": first_id}
    assert restart["stream_id"] == engine.stream_id != first_id
    assert restart["lang"] == "es-ES"

async def test_callbacks_for_other_streams_are_dropped():
    channel = ClientChannel()
    engine = ClientRecognitionEngine(channel, available=True)
    old, new = RecordingListener(), RecordingListener()

    engine.start("en-US", old)
    old_id = engine.stream_id
    engine.stop()
    engine.start("en-US", new)

    engine.dispatch_end(old_id)
    engine.dispatch_error(old_id, "network")
    engine.dispatch_results(None, [RecognitionResult("ghost", True)])
    engine.dispatch_started(engine.stream_id)
    engine.dispatch_results(engine.stream_id, [RecognitionResult("hello", True)])

    assert old.calls == []
    assert new.calls == ["start", ("result", ["hello"])]

async def test_callbacks_after_stop_are_dropped():
    channel = ClientChannel()
    engine = ClientRecognitionEngine(channel, available=True)
    listener = RecordingListener()

    engine.start("en-US", listener)
    stream_id = engine.stream_id
    engine.stop()
    engine.dispatch_end(stream_id)

    assert listener.calls == []

async def test_synthesis_cancel_forgets_interrupted_utterances():
    channel = ClientChannel()
    engine = ClientSynthesisEngine(channel, available=True)
    finished = []
    utterance = Utterance(text="Tengo fiebre", language="es")

    engine.speak(utterance, finished.append)
    engine.cancel()
    engine.dispatch_end(utterance.utterance_id)

    assert engine._in_flight == {}
    assert finished == []
    assert [m["type"] for m in sent(channel)] == ["synthesis_speak", "synthesis_cancel"]
