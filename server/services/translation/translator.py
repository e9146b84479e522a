# =============================================================================
# services/translation/translator.py
# =============================================================================

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

import httpx

from core.config import Settings, settings as default_settings
from core.exceptions import TranslationUnavailable
from ..text.sanitizer import sanitize
from .fallback import dictionary_translate, untranslated_notice
from .languages import is_pair_supported

logger = logging.getLogger(__name__)

# (message, severity)
Notifier = Callable[[str, str], None]

class Provenance(Enum):
    REMOTE = "remote"
    DICTIONARY = "dictionary"
    UNTRANSLATED_NOTICE = "untranslated_notice"
    IDENTITY = "identity"

@dataclass(frozen=True)
class TranslationResult:
    text: str
    provenance: Provenance

    def to_dict(self):
        return {"text": self.text, "provenance": self.provenance.value}

class TranslationService:
    """
    Remote translation through the MyMemory endpoint with an offline fallback chain.

    translate() never raises: network errors, HTTP failures and malformed
    payloads all degrade to the dictionary fallback or an untranslated notice.
    One outbound request per call, no retries.
    """

    def __init__(self, settings: Settings = default_settings,
                 client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.settings.api_request_timeout)
        return self._client

    async def translate(self, text: str, source_lang: str, target_lang: str,
                        notify: Optional[Notifier] = None) -> TranslationResult:
        """Translate text from source_lang to target_lang (base codes)"""
        sanitized_text = sanitize(text)

        if source_lang == target_lang:
            return TranslationResult(sanitized_text, Provenance.IDENTITY)

        if not is_pair_supported(source_lang, target_lang):
            logger.info(f"🌐 Pair {source_lang}->{target_lang} unsupported, using fallback")
            if notify:
                notify(f"Translation from {source_lang} to {target_lang} not supported. Using fallback.",
                       "warning")
            return self._fallback(sanitized_text, target_lang)

        try:
            translated = await self._translate_remote(sanitized_text, source_lang, target_lang)
            return TranslationResult(sanitize(translated), Provenance.REMOTE)
        except TranslationUnavailable as e:
            logger.warning(f"⚠️ Translation failed: {e.message}")
            if notify:
                notify("Translation service unavailable. Using fallback.", "warning")
            return self._fallback(sanitized_text, target_lang)

    async def _translate_remote(self, text: str, source_lang: str, target_lang: str) -> str:
        """Single GET against the remote endpoint; every failure becomes TranslationUnavailable"""
        params = {
            "q": text,
            "langpair": f"{source_lang}|{target_lang}",
            "de": self.settings.translation_contact_email,
        }

        try:
            response = await self.client.get(
                self.settings.translation_api_url,
                params=params,
                timeout=self.settings.api_request_timeout
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TranslationUnavailable(f"Translation request failed: {e}") from e

        if response.status_code != 200:
            raise TranslationUnavailable(
                f"Translation API error: {response.status_code}",
                status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            raise TranslationUnavailable("Translation API returned invalid JSON") from e

        if not isinstance(data, dict):
            raise TranslationUnavailable("Translation API returned an unexpected payload")

        status = data.get("responseStatus")
        response_data = data.get("responseData")
        translated = response_data.get("translatedText") if isinstance(response_data, dict) else None

        # MyMemory reports some statuses as strings, e.g. "403"
        if str(status) != "200" or not isinstance(translated, str) or not translated:
            raise TranslationUnavailable(f"Translation failed: {status}", status_code=response.status_code)

        logger.info(f"🌐 Remote translation {source_lang}->{target_lang} succeeded")
        return translated

    def _fallback(self, text: str, target_lang: str) -> TranslationResult:
        """Dictionary lookup first, then an explicit untranslated notice"""
        lowered = " ".join(text.lower().split())
        dictionary_result = dictionary_translate(text, target_lang)
        if dictionary_result != lowered:
            return TranslationResult(dictionary_result, Provenance.DICTIONARY)

        return TranslationResult(untranslated_notice(text, target_lang), Provenance.UNTRANSLATED_NOTICE)

    async def aclose(self):
        """Close the HTTP client if this service created it"""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
