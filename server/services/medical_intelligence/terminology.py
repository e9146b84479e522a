# =============================================================================
# services/medical_intelligence/terminology.py
# =============================================================================

import re
import logging
from typing import List, Pattern, Sequence, Tuple

logger = logging.getLogger(__name__)

# Ordered: substitutions run top to bottom, each over the output of the
# previous one. Nothing here guards against a later rule matching text an
# earlier rule produced.
MEDICAL_TERMS: Tuple[Tuple[str, str], ...] = (
    ("headache", "cephalalgia"),
    ("fever", "pyrexia"),
    ("stomach", "abdomen"),
    ("hurt", "pain"),
    ("prescription", "medication order"),
    ("allergic", "hypersensitivity"),
    ("penicillin", "antibiotic"),
    ("blood pressure", "systolic and diastolic pressure"),
    ("heartburn", "pyrosis"),
    ("rash", "cutaneous eruption"),
    ("dizzy", "vertigo"),
    ("throw up", "vomit"),
    ("bruise", "contusion"),
    ("bug bite", "arthropod assault"),
)

class MedicalTermEnhancer:
    """Replaces common symptom vocabulary with clinical terminology"""

    def __init__(self, terms: Sequence[Tuple[str, str]] = MEDICAL_TERMS):
        self.terms = tuple(terms)
        self._rules: List[Tuple[Pattern, str]] = [
            (re.compile(rf"\b{re.escape(common)}\b", re.IGNORECASE), clinical)
            for common, clinical in self.terms
        ]

    def enhance(self, text: str) -> str:
        """Apply every whole-word, case-insensitive substitution in table order"""
        if not text:
            return text

        enhanced = text
        for pattern, clinical in self._rules:
            # callable replacement so clinical terms are never read as group references
            enhanced = pattern.sub(lambda _match, term=clinical: term, enhanced)

        if enhanced != text:
            logger.debug(f"🩺 Enhanced medical terms: '{text[:40]}' -> '{enhanced[:40]}'")
        return enhanced

_default_enhancer = MedicalTermEnhancer()

def enhance_medical_terms(text: str) -> str:
    """Enhance text with the default clinical vocabulary"""
    return _default_enhancer.enhance(text)
