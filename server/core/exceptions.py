# core/exceptions.py

"""
Custom exceptions for the MediTranslate speech pipeline
Capability, permission and engine failures are reported to the user;
translation failures are absorbed by the fallback chain
"""

from typing import Optional

class MediTranslateException(Exception):
    """Base exception for the speech pipeline"""
    def __init__(self, message: str, error_code: str = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)

class NotSupportedError(MediTranslateException):
    """A required capability is missing on the connected client"""
    def __init__(self, message: str, capability: str = None):
        self.capability = capability
        super().__init__(message, "NOT_SUPPORTED")

class SynthesisUnsupported(NotSupportedError):
    """Speech synthesis is unavailable"""
    def __init__(self, message: str = "Speech synthesis is not supported on this client."):
        super().__init__(message, "synthesis")

class PermissionDenied(MediTranslateException):
    """Microphone access was refused"""
    def __init__(self, message: str = "Microphone access is not allowed. Please enable microphone permissions."):
        super().__init__(message, "PERMISSION_DENIED")

class EngineError(MediTranslateException):
    """Recognition engine faults other than permission refusal"""
    def __init__(self, message: str, kind: Optional[str] = None):
        self.kind = kind
        super().__init__(message, "ENGINE_ERROR")

class TranslationUnavailable(MediTranslateException):
    """Remote translation could not produce a usable result"""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message, "TRANSLATION_UNAVAILABLE")

class ClipboardError(MediTranslateException):
    """Clipboard write failed"""
    pass

class ConfigurationError(MediTranslateException):
    """Configuration and setup errors"""
    pass
