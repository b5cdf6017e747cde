from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_futures
from pathlib import Path

from doc_translator.config.settings import Settings
from doc_translator.jobs.controller import JobController
from doc_translator.jobs.registry import JobRegistry
from doc_translator.logging.logger import Log
from doc_translator.processor.processor import PipelineOrchestrator


class Worker:
    """Runs each submitted job on its own pool thread."""

    def __init__(
        self,
        registry: JobRegistry,
        orchestrator: PipelineOrchestrator,
        settings: Settings,
    ) -> None:
        self._registry = registry
        self._orchestrator = orchestrator
        self._settings = settings
        self._executor = ThreadPoolExecutor(
            max_workers=max(1, settings.max_concurrent_jobs),
            thread_name_prefix="job",
        )
        self._futures: dict[str, Future[None]] = {}

    def submit(
        self,
        file_name: str,
        input_path: Path,
        *,
        source_lang: str | None = None,
        target_lang: str | None = None,
        remove_input: bool = True,
    ) -> JobController:
        """Register a job for ``file_name`` and schedule its pipeline."""
        self._registry.purge_finished(self._settings.job_retention_seconds)
        self._futures = {
            job_id: future for job_id, future in self._futures.items() if not future.done()
        }
        controller = self._registry.create(
            file_name,
            source_lang=source_lang or self._settings.source_lang,
            target_lang=target_lang or self._settings.target_lang,
        )
        self._futures[controller.job.id] = self._executor.submit(
            self._orchestrator.run, controller, input_path, remove_input
        )
        Log.info(f"Queued job {controller.job.id} for {file_name}")
        return controller

    def cancel(self, job_id: str) -> bool:
        return self._registry.cancel(job_id)

    def wait(self, job_id: str, timeout: float | None = None) -> bool:
        """Block until the job's pipeline returns. False on timeout."""
        future = self._futures.get(job_id)
        if future is None:
            return True
        done, _ = wait_futures([future], timeout=timeout)
        return bool(done)

    def shutdown(self, wait: bool = True) -> None:
        Log.info("Worker shutting down")
        self._executor.shutdown(wait=wait)
