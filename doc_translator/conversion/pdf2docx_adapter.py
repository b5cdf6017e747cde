from pathlib import Path

import pymupdf
from pdf2docx import Converter

from doc_translator.conversion.base import BasePdfConverter
from doc_translator.conversion.exceptions import ConversionFailedError
from doc_translator.logging.logger import Log


class Pdf2DocxAdapter(BasePdfConverter):
    """Converts PDF to DOCX with pdf2docx (PyMuPDF based)."""

    def convert(self, source_path: Path, target_path: Path) -> Path:
        page_count = self._inspect(source_path)
        Log.info(f"Converting {page_count}-page PDF to DOCX: {source_path.name}")
        target_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            converter = Converter(str(source_path))
            try:
                converter.convert(str(target_path))
            finally:
                converter.close()
        except Exception as exc:
            raise ConversionFailedError(f"pdf2docx conversion failed: {exc}") from exc

        if not target_path.exists() or target_path.stat().st_size == 0:
            raise ConversionFailedError("pdf2docx produced no output")
        return target_path

    @staticmethod
    def _inspect(source_path: Path) -> int:
        """Open the PDF once with PyMuPDF to reject unreadable input early."""
        try:
            with pymupdf.open(str(source_path)) as doc:  # type: ignore[no-untyped-call]
                if doc.needs_pass:
                    raise ConversionFailedError("PDF is password protected")
                if doc.page_count == 0:
                    raise ConversionFailedError("PDF has no pages")
                return int(doc.page_count)
        except ConversionFailedError:
            raise
        except Exception as exc:
            raise ConversionFailedError(f"Not a readable PDF: {exc}") from exc
