# =============================================================================
# services/translation/languages.py
# =============================================================================

from typing import Dict, FrozenSet

DEFAULT_LANGUAGE_CODE = "en"

# Base language -> code understood by the translation endpoint
LANGUAGE_CODE_MAP: Dict[str, str] = {
    "en": "en",
    "es": "es",
    "fr": "fr",
    "de": "de",
    "it": "it",
    "pt": "pt",
    "ru": "ru",
    "zh": "zh",
    "ja": "ja",
    "ar": "ar",
}

# Directed: source -> targets the remote endpoint handles
SUPPORTED_LANGUAGE_PAIRS: Dict[str, FrozenSet[str]] = {
    "en": frozenset({"es", "fr", "de", "it", "pt", "ru", "zh", "ja", "ar"}),
    "es": frozenset({"en", "fr", "de", "it", "pt"}),
    "fr": frozenset({"en", "es", "de", "it", "pt"}),
    "de": frozenset({"en", "es", "fr", "it", "pt"}),
    "it": frozenset({"en", "es", "fr", "de", "pt"}),
    "pt": frozenset({"en", "es", "fr", "de", "it"}),
    "ru": frozenset({"en"}),
    "zh": frozenset({"en"}),
    "ja": frozenset({"en"}),
    "ar": frozenset({"en"}),
}

LANGUAGE_NAMES: Dict[str, str] = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "ru": "Russian",
    "zh": "Chinese",
    "ja": "Japanese",
    "ar": "Arabic",
}

# Recognition tags offered to clients
INPUT_LANGUAGE_TAGS: Dict[str, str] = {
    "en-US": "English (US)",
    "es-ES": "Spanish (Spain)",
    "fr-FR": "French (France)",
    "de-DE": "German (Germany)",
    "it-IT": "Italian (Italy)",
    "pt-BR": "Portuguese (Brazil)",
    "ru-RU": "Russian (Russia)",
    "zh-CN": "Chinese (China)",
    "ja-JP": "Japanese (Japan)",
    "ar-SA": "Arabic (Saudi Arabia)",
}

def resolve_base(tag: str) -> str:
    """Reduce a BCP-47 tag to a supported base code, defaulting to English"""
    if not tag:
        return DEFAULT_LANGUAGE_CODE
    base = tag.split("-")[0]
    return LANGUAGE_CODE_MAP.get(base, DEFAULT_LANGUAGE_CODE)

def is_pair_supported(source: str, target: str) -> bool:
    return target in SUPPORTED_LANGUAGE_PAIRS.get(source, frozenset())

def language_name(code: str) -> str:
    return LANGUAGE_NAMES.get(code, code)
