# =============================================================================
# services/text/sanitizer.py
# =============================================================================

import re

# Applied in order: whole script blocks first so their bodies go with them
_SCRIPT_BLOCK = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_TAG_MARKUP = re.compile(r"</?[^>]+(>|$)")
_JAVASCRIPT_URI = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_ATTRIBUTES = re.compile(r"onerror|onload|onclick", re.IGNORECASE)

_PATTERNS = (_SCRIPT_BLOCK, _TAG_MARKUP, _JAVASCRIPT_URI, _EVENT_ATTRIBUTES)

def _sanitize_once(text: str) -> str:
    for pattern in _PATTERNS:
        text = pattern.sub("", text)
    return text.strip()

def sanitize(text) -> str:
    """
    Strip script blocks, tag markup, javascript: URIs and inline event
    handler names from text crossing a trust boundary.

    Removal can splice fragments into a new match ("ononloadload"), so
    passes repeat until the text is stable, which keeps
    sanitize(sanitize(x)) == sanitize(x).
    """
    if not isinstance(text, str):
        return ""

    cleaned = _sanitize_once(text)
    while True:
        again = _sanitize_once(cleaned)
        if again == cleaned:
            return cleaned
        cleaned = again
