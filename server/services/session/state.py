# =============================================================================
# services/session/state.py
# =============================================================================

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

@dataclass
class Session:
    """
    In-memory state of one listening session.

    transcript holds enhanced source-language segments in commit order;
    translated_text holds translations in the order they resolved, so the
    two may differ in length while translations are in flight.
    """
    source_language_tag: str = "en-US"
    target_language_code: str = "en"
    transcript: List[str] = field(default_factory=list)
    translated_text: List[str] = field(default_factory=list)
    is_listening: bool = False
    last_activity_at: datetime = field(default_factory=datetime.now)
    max_segments: Optional[int] = None

    def append_transcript(self, segment: str):
        self.transcript.append(segment)
        self._trim(self.transcript)

    def append_translation(self, segment: str):
        self.translated_text.append(segment)
        self._trim(self.translated_text)

    def _trim(self, segments: List[str]):
        if self.max_segments is not None and len(segments) > self.max_segments:
            del segments[:len(segments) - self.max_segments]

    def clear(self):
        self.transcript.clear()
        self.translated_text.clear()

    def touch(self):
        self.last_activity_at = datetime.now()

    @property
    def has_content(self) -> bool:
        return bool(self.transcript or self.translated_text)

    @property
    def transcript_text(self) -> str:
        return " ".join(self.transcript)

    @property
    def translation_text(self) -> str:
        return " ".join(self.translated_text)

    def snapshot(self) -> Dict:
        return {
            "is_listening": self.is_listening,
            "transcript": list(self.transcript),
            "translated_text": list(self.translated_text),
            "source_language_tag": self.source_language_tag,
            "target_language_code": self.target_language_code,
            "last_activity_at": self.last_activity_at.isoformat()
        }
