# =============================================================================
# services/translation/fallback.py
# =============================================================================

"""
Offline fallback used when the remote translation service is unusable.

Deliberately tiny: a handful of common words per target language. The
vocabulary is keyed to everyday words ("headache", "fever"), so text that
already went through medical term enhancement rarely matches anything.
"""

from typing import Dict

from .languages import language_name

TRAILING_PUNCTUATION = ".,!?;:"

FALLBACK_VOCABULARY: Dict[str, Dict[str, str]] = {
    "en": {
        "pain": "pain",
        "headache": "headache",
        "fever": "fever",
        "help": "help",
        "medicine": "medicine",
        "doctor": "doctor",
        "emergency": "emergency",
    },
    "es": {
        "pain": "dolor",
        "headache": "dolor de cabeza",
        "fever": "fiebre",
        "help": "ayuda",
        "medicine": "medicina",
        "doctor": "médico",
        "emergency": "emergencia",
        "water": "agua",
        "food": "comida",
    },
    "fr": {
        "pain": "douleur",
        "headache": "mal de tête",
        "fever": "fièvre",
        "help": "aide",
        "medicine": "médicament",
        "doctor": "médecin",
        "emergency": "urgence",
        "water": "eau",
        "food": "nourriture",
    },
    "de": {
        "pain": "schmerz",
        "headache": "kopfschmerzen",
        "fever": "fieber",
        "help": "hilfe",
        "medicine": "medizin",
        "doctor": "arzt",
        "emergency": "notfall",
        "water": "wasser",
        "food": "essen",
    },
}

def dictionary_translate(text: str, target_lang: str) -> str:
    """Word-by-word lookup; unknown words pass through lowercased"""
    vocabulary = FALLBACK_VOCABULARY.get(target_lang, {})
    translated_words = []
    for word in text.lower().split():
        translated_words.append(vocabulary.get(word.rstrip(TRAILING_PUNCTUATION), word))
    return " ".join(translated_words)

def untranslated_notice(text: str, target_lang: str) -> str:
    return f"{text} [Would be translated to {language_name(target_lang)}]"
