import threading
import time
from pathlib import Path
from typing import ClassVar

from doc_translator.jobs.exceptions import InvalidTransitionError
from doc_translator.jobs.models import Job, JobStatus
from doc_translator.logging.logger import Log


class JobController:
    """State machine over a single Job.

    The pipeline is the only caller of the status-changing methods;
    ``request_cancel`` may be called from any thread and only raises the flag.
    """

    TRANSITIONS: ClassVar[dict[JobStatus, frozenset[JobStatus]]] = {
        JobStatus.QUEUED: frozenset({JobStatus.CONVERTING, JobStatus.PARSING_DOCX}),
        JobStatus.CONVERTING: frozenset({JobStatus.PARSING_DOCX}),
        JobStatus.PARSING_DOCX: frozenset({JobStatus.TRANSLATING}),
        JobStatus.TRANSLATING: frozenset({JobStatus.QA}),
        JobStatus.QA: frozenset({JobStatus.PACKING}),
        JobStatus.PACKING: frozenset({JobStatus.DONE}),
        JobStatus.DONE: frozenset(),
        JobStatus.ERROR: frozenset(),
        JobStatus.CANCELLED: frozenset(),
    }

    def __init__(self, job: Job) -> None:
        self._job = job
        self._lock = threading.Lock()

    @property
    def job(self) -> Job:
        return self._job

    @property
    def status(self) -> JobStatus:
        return self._job.status

    @property
    def cancel_requested(self) -> bool:
        return self._job.cancelled

    def can_transition(self, target: JobStatus) -> bool:
        current = self._job.status
        if current.is_terminal:
            return False
        if target in (JobStatus.ERROR, JobStatus.CANCELLED):
            return True
        return target in self.TRANSITIONS[current]

    def start(self) -> None:
        self._job.started_at = time.time()

    def advance(self, status: JobStatus, step_message: str, progress: int) -> None:
        """Move to the next pipeline stage.

        Raises:
            InvalidTransitionError: if ``status`` does not follow the current one,
                or names a terminal status.
        """
        if status.is_terminal:
            raise InvalidTransitionError(
                f"Use finish/fail/mark_cancelled to enter terminal status '{status.value}'"
            )
        with self._lock:
            self._transition(status)
            self._job.step_message = step_message
            self._job.progress = self._clamp(max(self._job.progress, progress))
        Log.info(f"Job {self._job.id}: {status.value} ({self._job.progress}%)")

    def set_progress(self, progress: int, step_message: str | None = None) -> None:
        """Raise progress (never lowers it); ignored once the job is terminal."""
        with self._lock:
            if self._job.status.is_terminal:
                return
            self._job.progress = self._clamp(max(self._job.progress, progress))
            if step_message is not None:
                self._job.step_message = step_message

    def request_cancel(self) -> bool:
        """Raise the cancellation flag. Returns False if the job already finished."""
        if self._job.status.is_terminal:
            return False
        self._job.request_cancel()
        Log.info(f"Job {self._job.id}: cancellation requested")
        return True

    def mark_cancelled(self) -> None:
        with self._lock:
            if self._job.status is JobStatus.CANCELLED:
                return
            self._transition(JobStatus.CANCELLED)
            self._job.step_message = "Cancelled"
            self._job.finished_at = time.time()
        Log.info(f"Job {self._job.id} cancelled")

    def fail(self, message: str) -> None:
        with self._lock:
            self._transition(JobStatus.ERROR)
            self._job.error_message = message
            self._job.step_message = "Processing failed"
            self._job.finished_at = time.time()
        Log.error(f"Job {self._job.id} failed: {message}")

    def finish(self, output_path: Path) -> None:
        with self._lock:
            self._transition(JobStatus.DONE)
            self._job.output_path = output_path
            self._job.progress = 100
            self._job.step_message = "Done"
            self._job.finished_at = time.time()
        Log.info(f"Job {self._job.id} completed: {output_path}")

    def elapsed_seconds(self, now: float | None = None) -> int:
        started = self._job.started_at
        if started is None:
            return 0
        end = self._job.finished_at or (now if now is not None else time.time())
        return max(0, int(end - started))

    def snapshot(self) -> dict[str, object]:
        """Polling view of the job."""
        job = self._job
        return {
            "id": job.id,
            "file_name": job.file_name,
            "status": job.status.value,
            "progress": job.progress,
            "step_message": job.step_message,
            "error_message": job.error_message,
            "elapsed_seconds": self.elapsed_seconds(),
            "total_segments": job.total_segments,
            "usage": {
                "prompt_tokens": job.usage.prompt_tokens,
                "completion_tokens": job.usage.completion_tokens,
                "total_tokens": job.usage.total_tokens,
            },
            "cost_usd": round(job.cost_usd, 6),
            "downloadable": job.status is JobStatus.DONE and job.output_path is not None,
        }

    def _transition(self, target: JobStatus) -> None:
        if not self.can_transition(target):
            raise InvalidTransitionError(
                f"Job {self._job.id}: cannot move from "
                f"'{self._job.status.value}' to '{target.value}'"
            )
        self._job.status = target

    @staticmethod
    def _clamp(progress: int) -> int:
        return max(0, min(100, progress))
