#!/usr/bin/env python3
"""
Machine translation providers.

A Translator turns one source string into the target language or raises
TranslationError. The merge treats any failure of a provider as "no
translation available" for that unit and keeps going with the next one.
"""

from abc import ABC, abstractmethod
from typing import Optional

import requests


GOOGLE_TRANSLATE_URL = "https://translation.googleapis.com/language/translate/v2"


class TranslationError(Exception):
    """Raised when a provider cannot translate a text."""
    pass


class Translator(ABC):
    """Abstract base class for translation providers."""

    @abstractmethod
    def translate(self, text: str, target_lang: str) -> str:
        """
        Translate text into the target language.

        Args:
            text: Source markup
            target_lang: Target locale identifier (e.g. 'fr', 'pt-BR')

        Returns:
            Translated markup

        Raises:
            TranslationError: If the provider fails for any reason
        """
        pass


class GoogleTranslator(Translator):
    """
    Translation via the Google Cloud Translation v2 REST API.

    Texts are sent with format=html so inline XLIFF elements such as
    `<ph id="0"/>` come back untouched and entities stay escaped.
    """

    def __init__(
        self,
        api_key: str,
        source_lang: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 30,
        url: str = GOOGLE_TRANSLATE_URL,
    ):
        if not api_key:
            raise ValueError("Google Translate requires an API key")
        self.api_key = api_key
        self.source_lang = source_lang
        self.session = session or requests.Session()
        self.timeout = timeout
        self.url = url

    def translate(self, text: str, target_lang: str) -> str:
        payload = {
            'q': [text],
            'target': target_lang,
            'format': 'html',
        }
        if self.source_lang:
            payload['source'] = self.source_lang

        try:
            response = self.session.post(
                self.url,
                params={'key': self.api_key},
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
            result = response.json()
        except (requests.RequestException, ValueError) as e:
            raise TranslationError(f"Google Translate request failed: {e}") from e

        try:
            translated = result['data']['translations'][0]['translatedText']
        except (KeyError, IndexError, TypeError) as e:
            raise TranslationError(f"Unexpected Google Translate response: {result!r}") from e

        if not translated:
            raise TranslationError("Google Translate returned an empty translation")
        return translated


def create_translator(
    enabled: bool,
    api_key: Optional[str],
    source_lang: Optional[str] = None,
) -> Optional[Translator]:
    """
    Build the translator for a run.

    Returns None when automatic translation is disabled.

    Raises:
        ValueError: If automatic translation is enabled without an API key
    """
    if not enabled:
        return None
    if not api_key:
        raise ValueError(
            "You must provide a Google Translate API key "
            "(--api-key or GOOGLE_TRANSLATE_API_KEY) to use --google-translate"
        )
    return GoogleTranslator(api_key, source_lang=source_lang)
