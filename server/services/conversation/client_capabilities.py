# =============================================================================
# services/conversation/client_capabilities.py
# =============================================================================

"""
Capabilities that live on the connected client (browser microphone,
speech synthesis, clipboard), proxied over the conversation WebSocket.
Commands go out through the ClientChannel outbox; the connection routes
the client's replies back to dispatch methods here.
"""

import asyncio
import logging
import uuid
from typing import Callable, Dict, Iterable, Optional

from core.exceptions import ClipboardError
from ..audio.recognition import RecognitionEngine, RecognitionResult
from ..audio.synthesis import SynthesisEngine, Utterance
from .pipeline import Clipboard

logger = logging.getLogger(__name__)

class ClientChannel:
    """Outbound message queue for one WebSocket connection"""

    def __init__(self):
        self.outbox: asyncio.Queue = asyncio.Queue()

    def send(self, message: Dict):
        self.outbox.put_nowait(message)

class ClientRecognitionEngine(RecognitionEngine):
    """
    Recognition running in the client. Each start() opens a stream with its
    own id; the client echoes it on every recognition callback and callbacks
    for any other stream are dropped.
    """

    def __init__(self, channel: ClientChannel, available: bool):
        self.channel = channel
        self._available = available
        self._listener = None
        self.stream_id: Optional[str] = None

    @property
    def available(self) -> bool:
        return self._available

    def start(self, language_tag: str, listener) -> None:
        self._listener = listener
        self.stream_id = str(uuid.uuid4())
        self.channel.send({
            "type": "recognition_start",
            "stream_id": self.stream_id,
            "lang": language_tag,
            "continuous": True,
            "interim_results": True
        })

    def stop(self) -> None:
        self.channel.send({"type": "recognition_stop", "stream_id": self.stream_id})
        self._listener = None
        self.stream_id = None

    def _listener_for(self, stream_id: Optional[str]):
        if self._listener is None or stream_id != self.stream_id:
            logger.info(f"🎤 Dropping callback for stale stream {stream_id}")
            return None
        return self._listener

    def dispatch_started(self, stream_id: Optional[str]):
        listener = self._listener_for(stream_id)
        if listener:
            listener.on_start()

    def dispatch_results(self, stream_id: Optional[str], results: Iterable[RecognitionResult]):
        listener = self._listener_for(stream_id)
        if listener:
            listener.on_result(results)

    def dispatch_error(self, stream_id: Optional[str], kind: str):
        listener = self._listener_for(stream_id)
        if listener:
            listener.on_error(kind)

    def dispatch_end(self, stream_id: Optional[str]):
        listener = self._listener_for(stream_id)
        if listener:
            listener.on_end()

class ClientSynthesisEngine(SynthesisEngine):

    def __init__(self, channel: ClientChannel, available: bool):
        self.channel = channel
        self._available = available
        self._in_flight: Dict[str, tuple] = {}

    @property
    def available(self) -> bool:
        return self._available

    def speak(self, utterance: Utterance, on_end: Callable[[Utterance], None]) -> None:
        self._in_flight[utterance.utterance_id] = (utterance, on_end)
        self.channel.send({
            "type": "synthesis_speak",
            "utterance_id": utterance.utterance_id,
            "text": utterance.text,
            "lang": utterance.language,
            "rate": utterance.rate
        })

    def cancel(self) -> None:
        self._in_flight.clear()
        self.channel.send({"type": "synthesis_cancel"})

    def dispatch_end(self, utterance_id: str):
        entry = self._in_flight.pop(utterance_id, None)
        if entry is None:
            logger.info(f"🔊 Completion for cancelled or unknown utterance {utterance_id}")
            return
        utterance, on_end = entry
        on_end(utterance)

class ClientClipboard(Clipboard):

    def __init__(self, channel: ClientChannel, available: bool, timeout: float = 5.0):
        self.channel = channel
        self._available = available
        self.timeout = timeout
        self._requests: Dict[str, asyncio.Future] = {}

    @property
    def available(self) -> bool:
        return self._available

    async def write_text(self, text: str) -> None:
        request_id = str(uuid.uuid4())
        future = asyncio.get_running_loop().create_future()
        self._requests[request_id] = future
        self.channel.send({"type": "clipboard_write", "request_id": request_id, "text": text})

        try:
            success = await asyncio.wait_for(future, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise ClipboardError("Clipboard write timed out") from e
        finally:
            self._requests.pop(request_id, None)

        if not success:
            raise ClipboardError("Client rejected clipboard write")

    def dispatch_result(self, request_id: str, success: bool):
        future: Optional[asyncio.Future] = self._requests.get(request_id)
        if future is None or future.done():
            logger.warning(f"⚠️ Clipboard result for unknown request {request_id}")
            return
        future.set_result(success)
