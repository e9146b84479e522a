# core/__init__.py

"""
Core Configuration and Utilities Package

Provides application-wide configuration, logging, and exception handling:
- Environment-based configuration management
- Logging setup with optional file rotation
- Exception taxonomy for capability, permission and translation failures
"""

from .config import settings, Settings
from .logging_config import configure_logging
from .exceptions import (
    MediTranslateException,
    NotSupportedError,
    SynthesisUnsupported,
    PermissionDenied,
    EngineError,
    TranslationUnavailable,
    ClipboardError,
    ConfigurationError
)

__all__ = [
    "settings",
    "Settings",
    "configure_logging",
    "MediTranslateException",
    "NotSupportedError",
    "SynthesisUnsupported",
    "PermissionDenied",
    "EngineError",
    "TranslationUnavailable",
    "ClipboardError",
    "ConfigurationError"
]
