from dataclasses import dataclass, field

from doc_translator.jobs.models import TokenUsage


@dataclass(frozen=True)
class LanguagePair:
    """Source and target language names as they appear in prompts."""

    source_lang: str
    target_lang: str


@dataclass(frozen=True)
class ChatCompletion:
    """Provider response text with the tokens it consumed."""

    content: str
    usage: TokenUsage = field(default_factory=TokenUsage)


@dataclass(frozen=True)
class TokenPricing:
    """USD prices per million tokens."""

    input_per_million: float = 0.0
    output_per_million: float = 0.0

    def cost(self, usage: TokenUsage) -> float:
        return (
            usage.prompt_tokens * self.input_per_million
            + usage.completion_tokens * self.output_per_million
        ) / 1_000_000
