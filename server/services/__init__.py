# =============================================================================
# services/__init__.py
# =============================================================================
"""
MediTranslate Services Package
Capture-to-translation pipeline organized by concern:
- text/: sanitization at trust boundaries
- medical_intelligence/: clinical term enhancement
- translation/: language resolution, remote translation and fallback
- audio/: speech capture and speech output
- session/: session state, events and inactivity purge
- conversation/: pipeline facade and WebSocket binding
"""

from .translation.translator import TranslationService
from .conversation.pipeline import ConversationPipeline

__all__ = [
    "TranslationService",
    "ConversationPipeline"
]
