from pathlib import Path

from doc_translator.config.settings import Settings
from doc_translator.conversion.factory import ConverterFactory
from doc_translator.document.parser import DocxParser
from doc_translator.document.writer import SegmentWriter
from doc_translator.jobs.controller import JobController
from doc_translator.logging.logger import Log
from doc_translator.processor.file_store import FileStore
from doc_translator.processor.pipeline import PipelineContext, PipelineStep
from doc_translator.processor.steps import (
    ConvertStep,
    PackStep,
    ParseStep,
    ReviewStep,
    TranslateStep,
)
from doc_translator.translation.factory import TranslatorFactory
from doc_translator.translation.models import LanguagePair


class PipelineOrchestrator:
    """Runs one job through its steps and records every outcome on the job.

    Pipeline: convert -> parse -> translate -> qa -> pack -> done.
    Cancellation is checked before and after each step. ``run`` never raises:
    failures end the job in ``error``, cancellation in ``cancelled``.
    """

    def __init__(
        self,
        steps: list[PipelineStep],
        file_store: FileStore,
        languages: LanguagePair,
    ) -> None:
        self._steps = steps
        self._file_store = file_store
        self._languages = languages

    def run(
        self, controller: JobController, input_path: Path, remove_input: bool = True
    ) -> None:
        """Process one job. With ``remove_input`` the uploaded file is deleted on success."""
        job = controller.job
        languages = LanguagePair(
            source_lang=job.source_lang or self._languages.source_lang,
            target_lang=job.target_lang or self._languages.target_lang,
        )
        context = PipelineContext(
            controller=controller, input_path=Path(input_path), languages=languages
        )
        Log.info(
            f"Processing job {job.id} ({job.file_name}): "
            f"{languages.source_lang} -> {languages.target_lang}"
        )
        controller.start()

        try:
            for step in self._steps:
                if self._stop_if_cancelled(controller, f"before {step.name}"):
                    return
                context = step.run(context)
                if self._stop_if_cancelled(controller, f"after {step.name}"):
                    return
            if context.output_path is None:
                raise ValueError("Pipeline finished without producing an output file")
            controller.finish(context.output_path)
        except Exception as exc:
            if controller.cancel_requested:
                Log.info(f"Job {job.id} was cancelled, discarding error: {exc}")
                controller.mark_cancelled()
                return
            Log.exception(f"Job {job.id} failed in pipeline")
            controller.fail(str(exc) or exc.__class__.__name__)
            return

        self._file_store.cleanup(
            context.input_path if remove_input else None, context.working_path
        )

    @staticmethod
    def _stop_if_cancelled(controller: JobController, checkpoint: str) -> bool:
        if not controller.cancel_requested:
            return False
        Log.info(f"Job {controller.job.id} cancelled {checkpoint}")
        controller.mark_cancelled()
        return True


def build_orchestrator(settings: Settings) -> PipelineOrchestrator:
    """Build a PipelineOrchestrator with all required adapters."""
    file_store = FileStore(work_dir=settings.work_dir, output_dir=settings.output_dir)
    steps: list[PipelineStep] = [
        ConvertStep(converter=ConverterFactory.create(settings), file_store=file_store),
        ParseStep(parser=DocxParser(), file_store=file_store),
        TranslateStep(translator=TranslatorFactory.create_translator(settings)),
        ReviewStep(reviewer=TranslatorFactory.create_reviewer(settings)),
        PackStep(writer=SegmentWriter(), file_store=file_store),
    ]
    return PipelineOrchestrator(
        steps=steps,
        file_store=file_store,
        languages=LanguagePair(
            source_lang=settings.source_lang,
            target_lang=settings.target_lang,
        ),
    )
