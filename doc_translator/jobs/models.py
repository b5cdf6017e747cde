import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class JobStatus(str, Enum):
    QUEUED = "queued"
    CONVERTING = "converting"
    PARSING_DOCX = "parsing-docx"
    TRANSLATING = "translating"
    QA = "qa"
    PACKING = "packing"
    DONE = "done"
    ERROR = "error"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({JobStatus.DONE, JobStatus.ERROR, JobStatus.CANCELLED})


@dataclass
class TokenUsage:
    """Token counts reported by the translation provider."""

    prompt_tokens: int = 0
    completion_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens

    def __add__(self, other: "TokenUsage") -> "TokenUsage":
        return TokenUsage(
            prompt_tokens=self.prompt_tokens + other.prompt_tokens,
            completion_tokens=self.completion_tokens + other.completion_tokens,
        )


@dataclass
class Job:
    """State of one uploaded file moving through the translation pipeline."""

    id: str
    file_name: str
    source_lang: str = ""
    target_lang: str = ""
    status: JobStatus = JobStatus.QUEUED
    progress: int = 0
    step_message: str = ""
    error_message: str | None = None
    created_at: float = field(default_factory=time.time)
    started_at: float | None = None
    finished_at: float | None = None
    total_segments: int = 0
    usage: TokenUsage = field(default_factory=TokenUsage)
    cost_usd: float = 0.0
    output_path: Path | None = None
    _cancel_event: threading.Event = field(
        default_factory=threading.Event, init=False, repr=False, compare=False
    )

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def request_cancel(self) -> None:
        self._cancel_event.set()

    def add_usage(self, usage: TokenUsage, cost_usd: float) -> None:
        """Accumulate provider usage; called by the translation passes."""
        self.usage = self.usage + usage
        self.cost_usd += cost_usd
