"""Translation module."""

from .translator import (
    DEFAULT_LANG,
    GoogleTranslateClient,
    ITranslationService,
    LanguageNormalizer,
    Translation,
)

__all__ = [
    "DEFAULT_LANG",
    "GoogleTranslateClient",
    "ITranslationService",
    "LanguageNormalizer",
    "Translation",
]
