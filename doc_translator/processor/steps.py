from pathlib import Path

from doc_translator.conversion.base import BasePdfConverter
from doc_translator.document.parser import DocxParser
from doc_translator.document.writer import SegmentWriter
from doc_translator.jobs.models import JobStatus
from doc_translator.logging.logger import Log
from doc_translator.processor.file_store import FileStore
from doc_translator.processor.pipeline import PipelineContext, PipelineStep
from doc_translator.translation.base import BaseTranslationPass

TRANSLATION_PROGRESS = (20, 80)
QA_PROGRESS = (80, 94)


def is_pdf(file_name: str) -> bool:
    return Path(file_name).suffix.lower() == ".pdf"


def _band(bounds: tuple[int, int], done: int, total: int) -> int:
    low, high = bounds
    if total <= 0:
        return high
    return low + (high - low) * done // total


class ConvertStep(PipelineStep):
    name = "convert"

    def __init__(self, converter: BasePdfConverter, file_store: FileStore) -> None:
        self._converter = converter
        self._file_store = file_store

    def run(self, context: PipelineContext) -> PipelineContext:
        job = context.controller.job
        if is_pdf(job.file_name):
            context.controller.advance(JobStatus.CONVERTING, "Converting PDF to DOCX...", 5)
            context.working_path = self._converter.convert(
                context.input_path, self._file_store.working_path(job)
            )
            Log.info(f"Job {job.id}: converted {job.file_name} to DOCX")
        else:
            context.working_path = self._file_store.copy_to_working(context.input_path, job)
        return context


class ParseStep(PipelineStep):
    name = "parse"

    def __init__(self, parser: DocxParser, file_store: FileStore) -> None:
        self._parser = parser
        self._file_store = file_store

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.working_path is None:
            raise ValueError("PipelineContext.working_path must be set before parsing")
        context.controller.advance(JobStatus.PARSING_DOCX, "Parsing DOCX...", 15)
        data = self._file_store.read(context.working_path)
        context.document = self._parser.parse(data)
        job = context.controller.job
        job.total_segments = len(context.document.segments)
        Log.info(f"Job {job.id}: {job.total_segments} segments to translate")
        return context


class TranslateStep(PipelineStep):
    name = "translate"

    def __init__(self, translator: BaseTranslationPass) -> None:
        self._translator = translator

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.document is None:
            raise ValueError("PipelineContext.document must be set before translation")
        controller = context.controller
        controller.advance(JobStatus.TRANSLATING, "Translating...", TRANSLATION_PROGRESS[0])

        def report(done: int, total: int) -> None:
            controller.set_progress(
                _band(TRANSLATION_PROGRESS, done, total), f"Translating... {done}/{total}"
            )

        self._translator.translate(
            controller.job, context.document.segments, context.languages, on_progress=report
        )
        return context


class ReviewStep(PipelineStep):
    name = "qa"

    def __init__(self, reviewer: BaseTranslationPass | None) -> None:
        self._reviewer = reviewer

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.document is None:
            raise ValueError("PipelineContext.document must be set before QA")
        controller = context.controller
        controller.advance(JobStatus.QA, "Reviewing translations...", QA_PROGRESS[0])
        if self._reviewer is None:
            Log.info(f"Job {controller.job.id}: QA disabled, skipping review")
            return context

        def report(done: int, total: int) -> None:
            controller.set_progress(
                _band(QA_PROGRESS, done, total), f"Reviewing translations... {done}/{total}"
            )

        self._reviewer.translate(
            controller.job, context.document.segments, context.languages, on_progress=report
        )
        return context


class PackStep(PipelineStep):
    name = "pack"

    def __init__(self, writer: SegmentWriter, file_store: FileStore) -> None:
        self._writer = writer
        self._file_store = file_store

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.document is None:
            raise ValueError("PipelineContext.document must be set before packing")
        controller = context.controller
        controller.advance(JobStatus.PACKING, "Packing translated document...", 95)
        data = self._writer.write(context.document)
        context.output_path = self._file_store.write_output(controller.job, data)
        return context
