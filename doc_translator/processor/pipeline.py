from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from doc_translator.document.models import Document
from doc_translator.jobs.controller import JobController
from doc_translator.translation.models import LanguagePair


@dataclass(slots=True)
class PipelineContext:
    controller: JobController
    input_path: Path
    languages: LanguagePair
    working_path: Path | None = None
    document: Document | None = None
    output_path: Path | None = None


class PipelineStep(ABC):
    name: str = "step"

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
