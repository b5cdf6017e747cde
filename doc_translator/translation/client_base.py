from abc import ABC, abstractmethod

from doc_translator.translation.models import ChatCompletion


class BaseTranslationClient(ABC):
    """Contract for provider-specific chat completion clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> ChatCompletion:
        """Return the provider's JSON response text and token usage."""
