# =============================================================================
# services/translation/__init__.py
# =============================================================================

"""
Translation Services

Remote translation with an offline fallback chain:
- Language code resolution and supported pair lookup
- MyMemory remote translation
- Dictionary fallback and untranslated notice
"""

from .translator import TranslationService, TranslationResult, Provenance
from .languages import resolve_base, is_pair_supported, language_name
from .fallback import dictionary_translate, untranslated_notice

__all__ = [
    "TranslationService",
    "TranslationResult",
    "Provenance",
    "resolve_base",
    "is_pair_supported",
    "language_name",
    "dictionary_translate",
    "untranslated_notice"
]
