"""Offline translation client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseTranslationClient and register the provider in TranslatorFactory.
"""

import json
from typing import ClassVar

from doc_translator.translation.client_base import BaseTranslationClient
from doc_translator.translation.models import ChatCompletion


class ExampleClientAdapter(BaseTranslationClient):
    """Adapter that never translates anything.

    No network calls. Every segment keeps its source text, which makes the
    pipeline usable for local development and end-to-end tests.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "translations": [],
        "issues": [],
    }

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> ChatCompletion:
        _ = model, temperature, system_prompt, user_prompt
        return ChatCompletion(content=json.dumps(self.DEFAULT_RESPONSE))
