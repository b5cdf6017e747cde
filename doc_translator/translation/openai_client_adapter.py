import httpx
import openai

from doc_translator.jobs.models import TokenUsage
from doc_translator.translation.client_base import BaseTranslationClient
from doc_translator.translation.exceptions import TranslationError, TranslationNetworkError
from doc_translator.translation.models import ChatCompletion


class OpenAIClientAdapter(BaseTranslationClient):
    """Translation client built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> ChatCompletion:
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise TranslationNetworkError(
                f"AI provider network error: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise TranslationNetworkError(
                f"AI provider API error: {exc}"
            ) from exc

        if not response.choices:
            raise TranslationError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise TranslationError("AI returned empty response")
        return ChatCompletion(content=content, usage=self._usage(response))

    @staticmethod
    def _usage(response: object) -> TokenUsage:
        usage = getattr(response, "usage", None)
        if usage is None:
            return TokenUsage()
        return TokenUsage(
            prompt_tokens=int(getattr(usage, "prompt_tokens", 0) or 0),
            completion_tokens=int(getattr(usage, "completion_tokens", 0) or 0),
        )
