"""Shared batching, retry and usage accounting for the LLM passes."""

import json
import time
from abc import abstractmethod
from pathlib import Path
from typing import Any, ClassVar

from doc_translator.document.models import Segment
from doc_translator.jobs.models import Job
from doc_translator.logging.logger import Log
from doc_translator.translation.base import BaseTranslationPass, ProgressCallback
from doc_translator.translation.client_base import BaseTranslationClient
from doc_translator.translation.exceptions import (
    TranslationError,
    TranslationNetworkError,
    TranslationValidationError,
)
from doc_translator.translation.models import LanguagePair, TokenPricing
from doc_translator.translation.prompt_loader import load_prompt_template
from doc_translator.translation.validator import parse_json_object


class BatchedLlmPass(BaseTranslationPass):
    """Sends segments to the provider in batches and applies the answers."""

    NAME: ClassVar[str] = "pass"
    PROMPT_NAME: ClassVar[str] = ""
    SYSTEM_PROMPT: ClassVar[str] = ""

    def __init__(
        self,
        *,
        client: BaseTranslationClient,
        model: str,
        temperature: float = 0.2,
        pricing: TokenPricing | None = None,
        batch_size: int = 20,
        batch_max_chars: int = 6000,
        max_retries: int = 3,
        retry_backoff_seconds: float = 2.0,
        prompt_template_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._pricing = pricing or TokenPricing()
        self._batch_size = max(1, batch_size)
        self._batch_max_chars = max(1, batch_max_chars)
        self._max_retries = max(0, max_retries)
        self._retry_backoff_seconds = retry_backoff_seconds
        self._prompt_template = load_prompt_template(self.PROMPT_NAME, prompt_template_path)

    def translate(
        self,
        job: Job,
        segments: list[Segment],
        languages: LanguagePair,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        batches = self._batches(segments)
        total = len(segments)
        Log.info(f"Job {job.id}: {self.NAME} of {total} segments in {len(batches)} batches")

        done = 0
        for number, batch in enumerate(batches, start=1):
            if job.cancelled:
                Log.info(f"Job {job.id}: {self.NAME} stopped before batch {number}")
                return
            applied = self._request(job, batch, self._build_prompt(batch, languages))
            done += len(batch)
            Log.debug(f"Job {job.id}: {self.NAME} batch {number}: {applied}/{len(batch)} applied")
            if on_progress is not None:
                on_progress(done, total)

    @abstractmethod
    def _batch_items(self, batch: list[Segment]) -> list[dict[str, object]]:
        """Per-segment JSON objects sent to the provider."""

    @abstractmethod
    def _apply(self, batch: list[Segment], payload: dict[str, Any]) -> int:
        """Write the provider answer into the batch; return how many segments changed."""

    def _batches(self, segments: list[Segment]) -> list[list[Segment]]:
        batches: list[list[Segment]] = []
        current: list[Segment] = []
        chars = 0
        for segment in segments:
            size = len(segment.source_text)
            if current and (
                len(current) >= self._batch_size or chars + size > self._batch_max_chars
            ):
                batches.append(current)
                current, chars = [], 0
            current.append(segment)
            chars += size
        if current:
            batches.append(current)
        return batches

    def _build_prompt(self, batch: list[Segment], languages: LanguagePair) -> str:
        return self._prompt_template.format(
            source_lang=languages.source_lang,
            target_lang=languages.target_lang,
            segments_json=json.dumps(self._batch_items(batch), ensure_ascii=False, indent=2),
        )

    def _request(self, job: Job, batch: list[Segment], prompt: str) -> int:
        """Call the provider and apply its answer.

        Network failures and malformed responses are retried with linear backoff.
        """
        attempts = self._max_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                completion = self._client.create_chat_completion(
                    model=self._model,
                    temperature=self._temperature,
                    system_prompt=self.SYSTEM_PROMPT,
                    user_prompt=prompt,
                )
                job.add_usage(completion.usage, self._pricing.cost(completion.usage))
                return self._apply(batch, parse_json_object(completion.content))
            except (TranslationNetworkError, TranslationValidationError) as exc:
                if attempt == attempts:
                    raise TranslationError(
                        f"{self.NAME} failed after {attempts} attempts: {exc}"
                    ) from exc
                Log.warning(
                    f"Job {job.id}: {self.NAME} attempt {attempt}/{attempts} failed: {exc}"
                )
                time.sleep(self._retry_backoff_seconds * attempt)
        raise TranslationError(f"{self.NAME} made no attempts")
