from pathlib import Path

import pytest

from doc_translator.config.settings import Settings


@pytest.fixture()
def offline_settings(tmp_path: Path) -> Settings:
    """Settings for a full pipeline run without network access."""
    return Settings(
        translation_provider="example",
        conversion_engine="pdf2docx",
        work_dir=tmp_path / "work",
        output_dir=tmp_path / "output",
        max_concurrent_jobs=2,
        translation_retry_backoff_seconds=0,
    )


@pytest.fixture()
def uploads_dir(tmp_path: Path) -> Path:
    path = tmp_path / "uploads"
    path.mkdir()
    return path
