from typing import Any

from doc_translator.document.models import Segment
from doc_translator.logging.logger import Log
from doc_translator.translation.batch_pass import BatchedLlmPass
from doc_translator.translation.prompt_loader import TRANSLATE_PROMPT
from doc_translator.translation.validator import parse_translations


class Translator(BatchedLlmPass):
    """First pass: translates every segment."""

    NAME = "translation"
    PROMPT_NAME = TRANSLATE_PROMPT
    SYSTEM_PROMPT = (
        "You are a professional translator of business documents. "
        "You answer with JSON only."
    )

    def _batch_items(self, batch: list[Segment]) -> list[dict[str, object]]:
        return [{"id": segment.id, "text": segment.source_text} for segment in batch]

    def _apply(self, batch: list[Segment], payload: dict[str, Any]) -> int:
        by_id = {segment.id: segment for segment in batch}
        translations = parse_translations(payload, set(by_id))
        applied = 0
        for segment_id, text in translations.items():
            # A blank answer counts as no translation; the source text stays.
            if not text.strip():
                continue
            by_id[segment_id].translated_text = text
            applied += 1
        missing = len(batch) - applied
        if missing:
            Log.warning(f"{missing} segments left untranslated in batch")
        return applied
