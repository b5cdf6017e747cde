import argparse
import sys
import time
from pathlib import Path

from doc_translator.config.settings import Settings
from doc_translator.jobs.controller import JobController
from doc_translator.jobs.models import JobStatus
from doc_translator.jobs.registry import JobRegistry
from doc_translator.logging.logger import Log
from doc_translator.processor.processor import build_orchestrator
from doc_translator.worker.worker import Worker

SUPPORTED_SUFFIXES = (".pdf", ".docx")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="doc-translator",
        description="Translate PDF/DOCX documents while keeping their formatting.",
    )
    parser.add_argument("files", nargs="+", type=Path, help="PDF or DOCX files")
    parser.add_argument("--source-lang", default=None, help="overrides SOURCE_LANG")
    parser.add_argument("--target-lang", default=None, help="overrides TARGET_LANG")
    parser.add_argument(
        "--poll-interval", type=float, default=1.0, help="seconds between progress reports"
    )
    return parser.parse_args(argv)


def run(
    worker: Worker,
    files: list[Path],
    *,
    source_lang: str | None = None,
    target_lang: str | None = None,
    poll_interval: float = 1.0,
) -> int:
    """Submit every file, report progress until all jobs finish; 0 if all are done."""
    controllers: list[JobController] = []
    for path in files:
        if path.suffix.lower() not in SUPPORTED_SUFFIXES:
            Log.error(f"Skipping {path}: only .pdf and .docx files are supported")
            continue
        if not path.is_file():
            Log.error(f"Skipping {path}: file not found")
            continue
        controllers.append(
            worker.submit(
                path.name,
                path,
                source_lang=source_lang,
                target_lang=target_lang,
                remove_input=False,
            )
        )

    try:
        while not all(c.status.is_terminal for c in controllers):
            time.sleep(poll_interval)
            _report(controllers)
    except KeyboardInterrupt:
        Log.info("Interrupted, cancelling jobs")
        for controller in controllers:
            worker.cancel(controller.job.id)
        for controller in controllers:
            worker.wait(controller.job.id)

    for controller in controllers:
        job = controller.job
        if job.status is JobStatus.DONE:
            Log.info(f"{job.file_name}: {job.output_path} (cost ${job.cost_usd:.4f})")
        else:
            Log.error(f"{job.file_name}: {job.status.value} {job.error_message or ''}".rstrip())

    ok = bool(controllers) and len(controllers) == len(files)
    return 0 if ok and all(c.status is JobStatus.DONE for c in controllers) else 1


def _report(controllers: list[JobController]) -> None:
    for controller in controllers:
        snapshot = controller.snapshot()
        Log.info(
            f"{snapshot['file_name']}: {snapshot['status']} {snapshot['progress']}% "
            f"{snapshot['step_message']} ({snapshot['elapsed_seconds']}s)"
        )


def main(argv: list[str] | None = None) -> int:
    """Entry point: settings -> orchestrator -> worker -> translate files."""
    args = parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    worker = Worker(JobRegistry(), build_orchestrator(settings), settings)
    try:
        return run(
            worker,
            args.files,
            source_lang=args.source_lang,
            target_lang=args.target_lang,
            poll_interval=args.poll_interval,
        )
    finally:
        worker.shutdown()


if __name__ == "__main__":
    sys.exit(main())
