import json
from unittest.mock import MagicMock

from doc_translator.document.models import Segment
from doc_translator.jobs.models import Job
from doc_translator.translation.client_base import BaseTranslationClient
from doc_translator.translation.models import ChatCompletion, LanguagePair
from doc_translator.translation.reviewer import QualityReviewer

LANGUAGES = LanguagePair(source_lang="English", target_lang="French")


def _make_reviewer(issues: list[dict[str, object]]) -> tuple[QualityReviewer, MagicMock]:
    client = MagicMock(spec=BaseTranslationClient)
    client.create_chat_completion.return_value = ChatCompletion(
        content=json.dumps({"issues": issues})
    )
    return QualityReviewer(client=client, model="m"), client


def _sent_items(client: MagicMock) -> list[dict[str, object]]:
    prompt = client.create_chat_completion.call_args.kwargs["user_prompt"]
    return json.loads(prompt[prompt.rindex("[\n") :])


class TestQualityReviewer:
    def test_no_issues_keeps_translations(self) -> None:
        reviewer, _client = _make_reviewer([])
        segments = [Segment(id=0, source_text="Invoice", run_refs=(0,), translated_text="Facture")]

        reviewer.translate(Job(id="j", file_name="a.docx"), segments, LANGUAGES)

        assert segments[0].translated_text == "Facture"

    def test_applies_revised_translations(self) -> None:
        reviewer, _client = _make_reviewer([{"id": 1, "revised": "Montant total"}])
        segments = [
            Segment(id=0, source_text="Invoice", run_refs=(0,), translated_text="Facture"),
            Segment(id=1, source_text="Total amount", run_refs=(1,), translated_text="Total"),
        ]

        reviewer.translate(Job(id="j", file_name="a.docx"), segments, LANGUAGES)

        assert [s.translated_text for s in segments] == ["Facture", "Montant total"]

    def test_blank_revisions_are_ignored(self) -> None:
        reviewer, _client = _make_reviewer([{"id": 0, "revised": "   "}])
        segments = [Segment(id=0, source_text="Invoice", run_refs=(0,), translated_text="Facture")]

        reviewer.translate(Job(id="j", file_name="a.docx"), segments, LANGUAGES)

        assert segments[0].translated_text == "Facture"

    def test_sends_source_and_current_translation(self) -> None:
        reviewer, client = _make_reviewer([])
        segments = [
            Segment(id=0, source_text="Invoice", run_refs=(0,), translated_text="Facture"),
            Segment(id=1, source_text="Date", run_refs=(1,)),
        ]

        reviewer.translate(Job(id="j", file_name="a.docx"), segments, LANGUAGES)

        assert _sent_items(client) == [
            {"id": 0, "source": "Invoice", "translation": "Facture"},
            {"id": 1, "source": "Date", "translation": ""},
        ]
        assert client.create_chat_completion.call_args.kwargs["system_prompt"] == (
            QualityReviewer.SYSTEM_PROMPT
        )

    def test_fills_untranslated_segments(self) -> None:
        reviewer, _client = _make_reviewer([{"id": 0, "revised": "Date"}])
        segments = [Segment(id=0, source_text="Date", run_refs=(0,))]

        reviewer.translate(Job(id="j", file_name="a.docx"), segments, LANGUAGES)

        assert segments[0].translated_text == "Date"

    def test_uses_qa_prompt(self) -> None:
        reviewer, client = _make_reviewer([])
        segments = [Segment(id=0, source_text="Invoice", run_refs=(0,), translated_text="Facture")]

        reviewer.translate(Job(id="j", file_name="a.docx"), segments, LANGUAGES)

        prompt = client.create_chat_completion.call_args.kwargs["user_prompt"]
        assert "Review translations" in prompt
        assert "from English to French" in prompt
