# =============================================================================
# services/conversation/connection.py
# =============================================================================

import asyncio
import json
import logging
import uuid
from datetime import datetime
from typing import Dict, Set

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from core.config import Settings, settings as default_settings
from models.schemas import ClientHello, ClientMessage
from ..audio.recognition import RecognitionResult
from ..session.events import PipelineEvent, Severity
from ..translation.translator import TranslationService
from .client_capabilities import (
    ClientChannel,
    ClientClipboard,
    ClientRecognitionEngine,
    ClientSynthesisEngine
)
from .pipeline import ConversationPipeline

logger = logging.getLogger(__name__)

class ClientMessageTypes:
    """Message types on the conversation socket"""

    # Client -> Server: intents
    HELLO = "hello"
    START = "start"
    STOP = "stop"
    CLEAR = "clear"
    SPEAK = "speak"
    COPY = "copy"
    SELECT_SOURCE_LANGUAGE = "select_source_language"
    SELECT_TARGET_LANGUAGE = "select_target_language"
    ACTIVITY = "activity"

    # Client -> Server: capability callbacks
    RECOGNITION_STARTED = "recognition_started"
    RECOGNITION_RESULT = "recognition_result"
    RECOGNITION_ERROR = "recognition_error"
    RECOGNITION_END = "recognition_end"
    SYNTHESIS_END = "synthesis_end"
    CLIPBOARD_RESULT = "clipboard_result"

    # Server -> Client
    SYSTEM_STATUS = "system_status"
    ERROR = "error"

class ConversationConnection:
    """
    Binds one WebSocket client to one ConversationPipeline.

    All outbound traffic (pipeline events and capability commands) goes
    through a single outbox so the client sees it in publication order.
    """

    def __init__(self, websocket: WebSocket, translation_service: TranslationService,
                 settings: Settings = default_settings):
        self.websocket = websocket
        self.translation_service = translation_service
        self.settings = settings
        self.connection_id = str(uuid.uuid4())

        self.channel = ClientChannel()
        self.pipeline: ConversationPipeline = None
        self.recognition: ClientRecognitionEngine = None
        self.synthesis: ClientSynthesisEngine = None
        self.clipboard: ClientClipboard = None
        self._background: Set[asyncio.Task] = set()

    async def run(self):
        await self.websocket.accept()

        try:
            hello = await self._receive_hello()
        except WebSocketDisconnect:
            return
        if hello is None:
            await self.websocket.close(code=1008)
            return

        self._build_pipeline(hello)
        sender = asyncio.create_task(self._pump_outbox())

        try:
            self._send_welcome(hello)
            self._check_transport()
            self.pipeline.events.publish_state(self.pipeline.session)

            while True:
                raw = await self.websocket.receive_text()
                message = self._parse(raw)
                if message is not None:
                    self._route(message)

        except WebSocketDisconnect:
            logger.info(f"🔌 WebSocket disconnected: {self.connection_id}")
        finally:
            for task in list(self._background):
                task.cancel()
            await self.pipeline.close()
            sender.cancel()

    async def _receive_hello(self):
        try:
            data = await self.websocket.receive_json()
            return ClientHello(**data)
        except (ValidationError, ValueError, TypeError) as e:
            logger.warning(f"⚠️ Invalid hello from {self.connection_id}: {e}")
            await self.websocket.send_json(self._error("Expected a hello message with client capabilities"))
            return None

    def _build_pipeline(self, hello: ClientHello):
        capabilities = hello.capabilities
        self.recognition = ClientRecognitionEngine(self.channel, capabilities.recognition)
        self.synthesis = ClientSynthesisEngine(self.channel, capabilities.synthesis)
        self.clipboard = ClientClipboard(
            self.channel, capabilities.clipboard, timeout=self.settings.clipboard_timeout_seconds
        )
        self.pipeline = ConversationPipeline(
            recognition=self.recognition,
            synthesis=self.synthesis,
            clipboard=self.clipboard,
            translation_service=self.translation_service,
            settings=self.settings
        )
        self.pipeline.events.subscribe(self._forward_event)
        logger.info(f"✅ Conversation connected: {self.connection_id} ({', '.join(capabilities.names()) or 'no capabilities'})")

    def _forward_event(self, event: PipelineEvent):
        self.channel.send(event.to_dict())

    async def _pump_outbox(self):
        while True:
            message = await self.channel.outbox.get()
            try:
                await self.websocket.send_json(message)
            except Exception as e:
                logger.warning(f"⚠️ Failed to send to {self.connection_id}: {e}")
                return

    def _send_welcome(self, hello: ClientHello):
        self.channel.send({
            "type": ClientMessageTypes.SYSTEM_STATUS,
            "content": {
                "status": "connected",
                "connection_id": self.connection_id,
                "capabilities": hello.capabilities.names(),
                "inactivity_timeout_seconds": self.settings.inactivity_timeout_seconds
            },
            "timestamp": datetime.now().isoformat()
        })

    def _check_transport(self):
        url = self.websocket.url
        if url.scheme != "wss" and url.hostname not in self.settings.insecure_transport_hosts:
            self.pipeline.events.notify(
                "Warning: For patient security, please use HTTPS. Data transmission may not be secure.",
                Severity.WARNING
            )

    def _parse(self, raw: str):
        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("Message must be a JSON object")
            return ClientMessage(**data)
        except (ValidationError, ValueError) as e:
            logger.warning(f"⚠️ Malformed message from {self.connection_id}: {e}")
            self.channel.send(self._error("Malformed message"))
            return None

    def _route(self, message: ClientMessage):
        """Dispatch a client message to the pipeline or a capability adapter"""
        message_type = message.type

        if message_type == ClientMessageTypes.START:
            self.pipeline.start()
        elif message_type == ClientMessageTypes.STOP:
            self.pipeline.stop()
        elif message_type == ClientMessageTypes.CLEAR:
            self.pipeline.clear()
        elif message_type == ClientMessageTypes.SPEAK:
            self.pipeline.speak()
        elif message_type == ClientMessageTypes.COPY:
            # waits on a clipboard_result that arrives through this same loop
            self._spawn(self.pipeline.copy())
        elif message_type == ClientMessageTypes.SELECT_SOURCE_LANGUAGE:
            self.pipeline.select_source_language(message.tag)
        elif message_type == ClientMessageTypes.SELECT_TARGET_LANGUAGE:
            self.pipeline.select_target_language(message.code)
        elif message_type == ClientMessageTypes.ACTIVITY:
            self.pipeline.handle_activity(message.signal or "")
        elif message_type == ClientMessageTypes.RECOGNITION_STARTED:
            self.recognition.dispatch_started(message.stream_id)
        elif message_type == ClientMessageTypes.RECOGNITION_RESULT:
            self.recognition.dispatch_results(message.stream_id, [
                RecognitionResult(transcript=r.transcript, is_final=r.is_final)
                for r in message.results
            ])
        elif message_type == ClientMessageTypes.RECOGNITION_ERROR:
            self.recognition.dispatch_error(message.stream_id, message.error or "unknown")
        elif message_type == ClientMessageTypes.RECOGNITION_END:
            self.recognition.dispatch_end(message.stream_id)
        elif message_type == ClientMessageTypes.SYNTHESIS_END:
            self.synthesis.dispatch_end(message.utterance_id)
        elif message_type == ClientMessageTypes.CLIPBOARD_RESULT:
            self.clipboard.dispatch_result(message.request_id, bool(message.success))
        else:
            logger.warning(f"⚠️ Unknown message type: {message_type}")
            self.channel.send(self._error(f"Unknown message type: {message_type}"))

    def _spawn(self, coro):
        task = asyncio.create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    def _error(self, message: str) -> Dict:
        return {
            "type": ClientMessageTypes.ERROR,
            "message": message,
            "timestamp": datetime.now().isoformat()
        }
