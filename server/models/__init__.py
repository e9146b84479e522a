# models/__init__.py

"""
MediTranslate Models Package

Pydantic models for the conversation WebSocket and REST endpoints
"""

from .schemas import (
    ClientCapabilities,
    ClientHello,
    ClientMessage,
    RecognitionResultPayload,
    LanguageOption,
    LanguagesResponse
)

__all__ = [
    "ClientCapabilities",
    "ClientHello",
    "ClientMessage",
    "RecognitionResultPayload",
    "LanguageOption",
    "LanguagesResponse"
]
