import shutil
from pathlib import Path

from doc_translator.jobs.models import Job
from doc_translator.logging.logger import Log
from doc_translator.processor.exceptions import FileReadError, OutputWriteError


def output_file_name(file_name: str) -> str:
    """Name of the downloadable file: {stem}-translated.docx"""
    return f"{Path(file_name).stem}-translated.docx"


class FileStore:
    """Resolves working/output paths for a job and moves bytes between them."""

    def __init__(self, work_dir: Path, output_dir: Path) -> None:
        self._work_dir = work_dir
        self._output_dir = output_dir

    def working_path(self, job: Job) -> Path:
        return self._work_dir / f"{job.id}.docx"

    def output_path(self, job: Job) -> Path:
        return self._output_dir / job.id / output_file_name(job.file_name)

    def copy_to_working(self, source_path: Path, job: Job) -> Path:
        target = self.working_path(job)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source_path, target)
        except OSError as exc:
            raise FileReadError(f"Cannot copy {source_path} to working directory: {exc}") from exc
        return target

    def read(self, path: Path) -> bytes:
        """Raises:
        FileReadError: if the file is missing or unreadable.
        """
        try:
            return path.read_bytes()
        except OSError as exc:
            raise FileReadError(f"Cannot read {path}: {exc}") from exc

    def write_output(self, job: Job, data: bytes) -> Path:
        path = self.output_path(job)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise OutputWriteError(f"Cannot write {path}: {exc}") from exc
        return path

    @staticmethod
    def cleanup(*paths: Path | None) -> None:
        """Best-effort removal of temporary files; failures are only logged."""
        for path in paths:
            if path is None:
                continue
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                Log.warning(f"Could not remove temporary file {path}: {exc}")
