from abc import ABC, abstractmethod
from collections.abc import Callable

from doc_translator.document.models import Segment
from doc_translator.jobs.models import Job
from doc_translator.translation.models import LanguagePair

ProgressCallback = Callable[[int, int], None]


class BaseTranslationPass(ABC):
    """Contract for translation and quality-review passes."""

    @abstractmethod
    def translate(
        self,
        job: Job,
        segments: list[Segment],
        languages: LanguagePair,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        """Annotate ``segment.translated_text`` in place.

        Args:
            job: Owning job; usage and cost are added to it, and the pass
                 stops early once ``job.cancelled`` is set.
            segments: Segments in document order.
            languages: Source and target language.
            on_progress: Called with (segments processed, segments total).

        Raises:
            TranslationError: when the provider keeps failing.
        """
