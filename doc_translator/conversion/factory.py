from typing import ClassVar

from doc_translator.config.settings import Settings
from doc_translator.conversion.base import BasePdfConverter
from doc_translator.conversion.libreoffice_adapter import LibreOfficeAdapter
from doc_translator.conversion.pdf2docx_adapter import Pdf2DocxAdapter


class ConverterFactory:
    """Creates the PDF to DOCX converter selected in settings."""

    ENGINES: ClassVar[tuple[str, ...]] = ("pdf2docx", "libreoffice")

    @classmethod
    def create(cls, settings: Settings) -> BasePdfConverter:
        engine = settings.conversion_engine.lower()
        if engine == "pdf2docx":
            return Pdf2DocxAdapter()
        if engine == "libreoffice":
            return LibreOfficeAdapter(
                binary=settings.libreoffice_binary,
                timeout_seconds=settings.libreoffice_timeout_seconds,
            )
        raise ValueError(
            f"Unknown conversion engine '{engine}'. Choose from: {list(cls.ENGINES)}"
        )
