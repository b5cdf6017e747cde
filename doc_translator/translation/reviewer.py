from typing import Any

from doc_translator.document.models import Segment
from doc_translator.logging.logger import Log
from doc_translator.translation.batch_pass import BatchedLlmPass
from doc_translator.translation.prompt_loader import QA_PROMPT
from doc_translator.translation.validator import parse_issues


class QualityReviewer(BatchedLlmPass):
    """Second pass: re-checks translations and retranslates flagged segments.

    Segments the first pass left untranslated are sent with an empty
    translation, so the reviewer flags and fills them too.
    """

    NAME = "QA"
    PROMPT_NAME = QA_PROMPT
    SYSTEM_PROMPT = (
        "You are a meticulous reviewer of business document translations. "
        "You answer with JSON only."
    )

    def _batch_items(self, batch: list[Segment]) -> list[dict[str, object]]:
        return [
            {
                "id": segment.id,
                "source": segment.source_text,
                "translation": segment.translated_text or "",
            }
            for segment in batch
        ]

    def _apply(self, batch: list[Segment], payload: dict[str, Any]) -> int:
        by_id = {segment.id: segment for segment in batch}
        revised = 0
        for segment_id, text in parse_issues(payload, set(by_id)).items():
            if not text.strip():
                continue
            by_id[segment_id].translated_text = text
            revised += 1
        if revised:
            Log.info(f"QA revised {revised} of {len(batch)} segments")
        return revised
