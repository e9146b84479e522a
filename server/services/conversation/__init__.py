# =============================================================================
# services/conversation/__init__.py
# =============================================================================

"""
Real-time speech translation pipeline and its WebSocket binding
"""

from .pipeline import Clipboard, ConversationPipeline
from .client_capabilities import ClientChannel, ClientClipboard, ClientRecognitionEngine, ClientSynthesisEngine
from .connection import ClientMessageTypes, ConversationConnection

__all__ = [
    "Clipboard",
    "ConversationPipeline",
    "ClientChannel",
    "ClientClipboard",
    "ClientRecognitionEngine",
    "ClientSynthesisEngine",
    "ClientMessageTypes",
    "ConversationConnection"
]
