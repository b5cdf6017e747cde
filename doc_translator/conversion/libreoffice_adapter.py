import shutil
import subprocess
import tempfile
from pathlib import Path

from doc_translator.conversion.base import BasePdfConverter
from doc_translator.conversion.exceptions import ConversionFailedError
from doc_translator.logging.logger import Log


class LibreOfficeAdapter(BasePdfConverter):
    """Converts PDF to DOCX with a headless LibreOffice process."""

    def __init__(self, binary: str = "soffice", timeout_seconds: int = 300) -> None:
        self._binary = binary
        self._timeout_seconds = timeout_seconds

    def convert(self, source_path: Path, target_path: Path) -> Path:
        target_path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.TemporaryDirectory(prefix="doc-translator-lo-") as out_dir:
            self._run(source_path, Path(out_dir))
            produced = Path(out_dir) / f"{source_path.stem}.docx"
            if not produced.exists() or produced.stat().st_size == 0:
                raise ConversionFailedError("LibreOffice produced no output")
            shutil.move(str(produced), target_path)
        return target_path

    def _run(self, source_path: Path, out_dir: Path) -> None:
        command = [
            self._binary,
            "--headless",
            "--infilter=writer_pdf_import",
            "--convert-to",
            "docx:MS Word 2007 XML",
            "--outdir",
            str(out_dir),
            str(source_path),
        ]
        Log.info(f"Converting PDF to DOCX with LibreOffice: {source_path.name}")
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self._timeout_seconds,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ConversionFailedError(f"LibreOffice binary not found: {self._binary}") from exc
        except subprocess.TimeoutExpired as exc:
            raise ConversionFailedError(
                f"LibreOffice timed out after {self._timeout_seconds}s"
            ) from exc

        if result.returncode != 0:
            raise ConversionFailedError(
                f"LibreOffice exited with code {result.returncode}: {result.stderr.strip()}"
            )
