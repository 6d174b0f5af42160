"""Translation service client and language normalization."""

from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from ..logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_LANG = "th"
INVALID_TEXT = "ข้อความไม่ถูกต้อง"

TRANSLATE_URL = "https://translation.googleapis.com/language/translate/v2"
DETECT_URL = f"{TRANSLATE_URL}/detect"


class ITranslationService(Protocol):
    """Language detection and machine translation."""

    async def detect(self, text: str) -> str:
        """Return the language code of `text`."""
        ...

    async def translate(self, text: str, target_lang: str) -> str:
        """Translate `text` into `target_lang`."""
        ...


class GoogleTranslateClient:
    """Google Cloud Translation (v2 REST) client."""

    def __init__(self, http: httpx.AsyncClient, api_key: str):
        self._http = http
        self._api_key = api_key

    async def detect(self, text: str) -> str:
        response = await self._http.post(
            DETECT_URL, params={"key": self._api_key}, data={"q": text}
        )
        response.raise_for_status()
        detections = response.json()["data"]["detections"]
        return detections[0][0]["language"]

    async def translate(self, text: str, target_lang: str) -> str:
        response = await self._http.post(
            TRANSLATE_URL,
            params={"key": self._api_key},
            data={"q": text, "target": target_lang, "format": "text"},
        )
        response.raise_for_status()
        return response.json()["data"]["translations"][0]["translatedText"]


@dataclass(frozen=True)
class Translation:
    """Text tagged with its language."""

    text: str
    lang: str


class LanguageNormalizer:
    """Detects the language of inbound text and localizes outbound text."""

    def __init__(self, service: ITranslationService):
        self._service = service

    async def detect(self, text: Any) -> str:
        """Detected language of `text`, or the default language."""
        return (await self.detect_and_translate(text)).lang

    async def detect_and_translate(
        self, text: Any, target_lang: str | None = None
    ) -> Translation:
        """
        Detect the language of `text` and translate it to `target_lang`.

        With no target, or a target equal to the source language, the input is
        returned unchanged and tagged with the detected language. Non-string
        input degrades to a fixed error text in the default language, and a
        failing translation service returns the input tagged as the default
        language.
        """
        if not isinstance(text, str):
            logger.error(f"detect_and_translate: input is not a string: {text!r}")
            return Translation(text=INVALID_TEXT, lang=DEFAULT_LANG)

        try:
            source_lang = await self._service.detect(text)
            if not target_lang or target_lang == source_lang:
                return Translation(text=text, lang=source_lang)

            translated = await self._service.translate(text, target_lang)
            return Translation(text=translated, lang=target_lang)
        except (httpx.HTTPError, KeyError, IndexError, ValueError) as e:
            logger.error(f"Translation error: {e}")
            return Translation(text=text, lang=DEFAULT_LANG)

    async def localize(self, text: str, lang: str) -> str:
        """Shorthand: `text` translated into `lang`."""
        return (await self.detect_and_translate(text, lang)).text
