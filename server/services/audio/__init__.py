# =============================================================================
# services/audio/__init__.py
# =============================================================================

"""
Audio Processing Services

Speech capture and speech output behind injectable capabilities:
- Continuous recognition driving the translation pipeline
- Single-utterance text-to-speech
"""

from .recognition import CaptureState, RecognitionEngine, RecognitionResult, SpeechCaptureSession
from .synthesis import SpeechOutput, SynthesisEngine, Utterance

__all__ = [
    "CaptureState",
    "RecognitionEngine",
    "RecognitionResult",
    "SpeechCaptureSession",
    "SpeechOutput",
    "SynthesisEngine",
    "Utterance"
]
