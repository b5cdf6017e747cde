from pathlib import Path

import pytest

from doc_translator.jobs.controller import JobController
from doc_translator.jobs.exceptions import InvalidTransitionError
from doc_translator.jobs.models import Job, JobStatus, TokenUsage


def _make_controller(status: JobStatus = JobStatus.QUEUED) -> JobController:
    job = Job(id="job-1", file_name="report.docx")
    job.status = status
    return JobController(job)


class TestHappyPath:
    def test_docx_path_reaches_done(self) -> None:
        controller = _make_controller()
        controller.start()

        controller.advance(JobStatus.PARSING_DOCX, "Parsing", 15)
        controller.advance(JobStatus.TRANSLATING, "Translating", 20)
        controller.advance(JobStatus.QA, "Reviewing", 80)
        controller.advance(JobStatus.PACKING, "Packing", 95)
        controller.finish(Path("/out/report-translated.docx"))

        job = controller.job
        assert job.status is JobStatus.DONE
        assert job.progress == 100
        assert job.output_path == Path("/out/report-translated.docx")
        assert job.finished_at is not None
        assert job.error_message is None

    def test_pdf_path_starts_with_conversion(self) -> None:
        controller = _make_controller()

        controller.advance(JobStatus.CONVERTING, "Converting", 5)
        controller.advance(JobStatus.PARSING_DOCX, "Parsing", 15)

        assert controller.status is JobStatus.PARSING_DOCX
        assert controller.job.progress == 15

    def test_advance_sets_step_message(self) -> None:
        controller = _make_controller()

        controller.advance(JobStatus.PARSING_DOCX, "Parsing DOCX...", 15)

        assert controller.job.step_message == "Parsing DOCX..."


class TestInvalidTransitions:
    def test_cannot_skip_stages(self) -> None:
        controller = _make_controller()

        with pytest.raises(InvalidTransitionError, match="queued"):
            controller.advance(JobStatus.TRANSLATING, "Translating", 20)

    def test_cannot_go_backwards(self) -> None:
        controller = _make_controller(JobStatus.QA)

        with pytest.raises(InvalidTransitionError):
            controller.advance(JobStatus.TRANSLATING, "Translating", 20)

    def test_advance_refuses_terminal_status(self) -> None:
        controller = _make_controller(JobStatus.PACKING)

        with pytest.raises(InvalidTransitionError, match="finish"):
            controller.advance(JobStatus.DONE, "Done", 100)

    def test_finish_requires_packing(self) -> None:
        controller = _make_controller(JobStatus.TRANSLATING)

        with pytest.raises(InvalidTransitionError):
            controller.finish(Path("/out.docx"))

    @pytest.mark.parametrize("terminal", [JobStatus.DONE, JobStatus.ERROR, JobStatus.CANCELLED])
    def test_terminal_status_is_final(self, terminal: JobStatus) -> None:
        controller = _make_controller(terminal)

        with pytest.raises(InvalidTransitionError):
            controller.fail("late failure")
        assert controller.status is terminal

    def test_mark_cancelled_twice_is_a_no_op(self) -> None:
        controller = _make_controller(JobStatus.TRANSLATING)

        controller.mark_cancelled()
        controller.mark_cancelled()

        assert controller.status is JobStatus.CANCELLED


class TestProgress:
    def test_progress_never_decreases(self) -> None:
        controller = _make_controller(JobStatus.TRANSLATING)
        controller.set_progress(60)

        controller.set_progress(30)

        assert controller.job.progress == 60

    def test_progress_is_clamped(self) -> None:
        controller = _make_controller(JobStatus.TRANSLATING)

        controller.set_progress(250)

        assert controller.job.progress == 100

    def test_progress_ignored_once_terminal(self) -> None:
        controller = _make_controller(JobStatus.TRANSLATING)
        controller.set_progress(40)
        controller.fail("boom")

        controller.set_progress(90, "late")

        assert controller.job.progress == 40
        assert controller.job.step_message == "Processing failed"

    def test_advance_does_not_lower_progress(self) -> None:
        controller = _make_controller(JobStatus.TRANSLATING)
        controller.set_progress(79)

        controller.advance(JobStatus.QA, "Reviewing", 10)

        assert controller.job.progress == 79


class TestCancellation:
    def test_request_cancel_only_sets_flag(self) -> None:
        controller = _make_controller(JobStatus.TRANSLATING)

        assert controller.request_cancel() is True

        assert controller.cancel_requested is True
        assert controller.job.cancelled is True
        assert controller.status is JobStatus.TRANSLATING

    def test_request_cancel_on_finished_job_returns_false(self) -> None:
        controller = _make_controller(JobStatus.DONE)

        assert controller.request_cancel() is False
        assert controller.job.cancelled is False

    def test_mark_cancelled_has_no_error_message(self) -> None:
        controller = _make_controller(JobStatus.PARSING_DOCX)
        controller.request_cancel()

        controller.mark_cancelled()

        assert controller.status is JobStatus.CANCELLED
        assert controller.job.error_message is None
        assert controller.job.output_path is None
        assert controller.job.finished_at is not None


class TestFailure:
    def test_fail_records_message(self) -> None:
        controller = _make_controller(JobStatus.PARSING_DOCX)

        controller.fail("Invalid DOCX: word/document.xml not found")

        job = controller.job
        assert job.status is JobStatus.ERROR
        assert job.error_message == "Invalid DOCX: word/document.xml not found"
        assert job.step_message == "Processing failed"
        assert job.finished_at is not None


class TestSnapshot:
    def test_reports_polling_fields(self) -> None:
        controller = _make_controller(JobStatus.TRANSLATING)
        controller.job.add_usage(TokenUsage(prompt_tokens=100, completion_tokens=50), 0.25)

        snapshot = controller.snapshot()

        assert snapshot["id"] == "job-1"
        assert snapshot["status"] == "translating"
        assert snapshot["usage"] == {
            "prompt_tokens": 100,
            "completion_tokens": 50,
            "total_tokens": 150,
        }
        assert snapshot["cost_usd"] == 0.25
        assert snapshot["downloadable"] is False

    def test_downloadable_when_done(self) -> None:
        controller = _make_controller(JobStatus.PACKING)
        controller.finish(Path("/out.docx"))

        assert controller.snapshot()["downloadable"] is True


class TestElapsed:
    def test_zero_before_start(self) -> None:
        assert _make_controller().elapsed_seconds() == 0

    def test_uses_now_while_running(self) -> None:
        controller = _make_controller()
        controller.job.started_at = 1000.0

        assert controller.elapsed_seconds(now=1042.5) == 42

    def test_uses_finished_at_when_finished(self) -> None:
        controller = _make_controller()
        controller.job.started_at = 1000.0
        controller.job.finished_at = 1010.0

        assert controller.elapsed_seconds(now=5000.0) == 10
