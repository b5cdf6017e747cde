from typing import ClassVar

from doc_translator.config.settings import Settings
from doc_translator.translation.base import BaseTranslationPass
from doc_translator.translation.batch_pass import BatchedLlmPass
from doc_translator.translation.client_base import BaseTranslationClient
from doc_translator.translation.example_client_adapter import ExampleClientAdapter
from doc_translator.translation.models import TokenPricing
from doc_translator.translation.openai_client_adapter import OpenAIClientAdapter
from doc_translator.translation.reviewer import QualityReviewer
from doc_translator.translation.translator import Translator


class TranslatorFactory:
    """Creates the configured translation and QA passes."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create_translator(cls, settings: Settings) -> BaseTranslationPass:
        return cls._build(Translator, settings)

    @classmethod
    def create_reviewer(cls, settings: Settings) -> BaseTranslationPass | None:
        """Return the QA pass, or None when QA is disabled."""
        if not settings.qa_enabled:
            return None
        return cls._build(QualityReviewer, settings)

    @classmethod
    def create_client(cls, settings: Settings) -> BaseTranslationClient:
        provider = settings.translation_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        return OpenAIClientAdapter(
            api_key=settings.translation_api_key,
            timeout_seconds=settings.translation_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )

    @classmethod
    def _build(cls, pass_cls: type[BatchedLlmPass], settings: Settings) -> BatchedLlmPass:
        return pass_cls(
            client=cls.create_client(settings),
            model=settings.translation_model_name,
            temperature=settings.translation_temperature,
            pricing=TokenPricing(
                input_per_million=settings.input_cost_per_million_tokens,
                output_per_million=settings.output_cost_per_million_tokens,
            ),
            batch_size=settings.translation_batch_size,
            batch_max_chars=settings.translation_batch_max_chars,
            max_retries=settings.translation_max_retries,
            retry_backoff_seconds=settings.translation_retry_backoff_seconds,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        configured = settings.translation_base_url.strip() or None
        if provider == "openai":
            return configured
        if provider == "openai_compatible":
            if configured is None:
                raise ValueError(
                    "translation_base_url is required for "
                    "translation_provider=openai_compatible"
                )
            return configured
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return configured or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown translation provider '{provider}'. Choose from: {supported}"
        )
