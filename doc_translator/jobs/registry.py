import threading
import time
import uuid

from doc_translator.jobs.controller import JobController
from doc_translator.jobs.exceptions import JobNotFoundError
from doc_translator.jobs.models import Job
from doc_translator.logging.logger import Log


class JobRegistry:
    """In-memory, thread-safe registry of jobs for the lifetime of the process."""

    def __init__(self) -> None:
        self._jobs: dict[str, JobController] = {}
        self._lock = threading.Lock()

    def create(self, file_name: str, source_lang: str = "", target_lang: str = "") -> JobController:
        job = Job(
            id=str(uuid.uuid4()),
            file_name=file_name,
            source_lang=source_lang,
            target_lang=target_lang,
        )
        controller = JobController(job)
        with self._lock:
            self._jobs[job.id] = controller
        Log.info(f"Created job {job.id} for {file_name}")
        return controller

    def get(self, job_id: str) -> JobController:
        """Raises:
        JobNotFoundError: if no job has this id.
        """
        with self._lock:
            controller = self._jobs.get(job_id)
        if controller is None:
            raise JobNotFoundError(f"Job not found: {job_id}")
        return controller

    def cancel(self, job_id: str) -> bool:
        """Request cancellation; False when the job has already finished."""
        return self.get(job_id).request_cancel()

    def list_jobs(self) -> list[JobController]:
        with self._lock:
            return list(self._jobs.values())

    def purge_finished(self, older_than_seconds: float, now: float | None = None) -> int:
        """Drop terminal jobs that finished more than ``older_than_seconds`` ago."""
        cutoff = (now if now is not None else time.time()) - older_than_seconds
        with self._lock:
            expired = [
                job_id
                for job_id, controller in self._jobs.items()
                if controller.status.is_terminal
                and (controller.job.finished_at or 0.0) <= cutoff
            ]
            for job_id in expired:
                del self._jobs[job_id]
        if expired:
            Log.info(f"Purged {len(expired)} finished jobs")
        return len(expired)
