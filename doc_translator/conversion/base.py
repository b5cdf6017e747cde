from abc import ABC, abstractmethod
from pathlib import Path


class BasePdfConverter(ABC):
    """Contract for all PDF to DOCX conversion adapters."""

    @abstractmethod
    def convert(self, source_path: Path, target_path: Path) -> Path:
        """Convert the PDF at ``source_path`` into a DOCX at ``target_path``.

        Args:
            source_path: Path of the uploaded PDF.
            target_path: Where the DOCX must be written.

        Returns:
            The path of the written DOCX.

        Raises:
            ConversionFailedError: if conversion fails for any reason.
        """
