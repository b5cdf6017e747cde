from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    work_dir: Path = Path("work")
    output_dir: Path = Path("output")
    max_concurrent_jobs: int = 2
    job_retention_seconds: int = 3600

    source_lang: str = "English"
    target_lang: str = "Traditional Chinese"

    conversion_engine: str = "pdf2docx"
    libreoffice_binary: str = "soffice"
    libreoffice_timeout_seconds: int = 300

    translation_provider: str = "openai"
    translation_api_key: str = ""
    translation_model_name: str = "gpt-4o-mini"
    translation_base_url: str = ""
    translation_timeout_seconds: int = 60
    translation_temperature: float = 0.2

    translation_batch_size: int = 20
    translation_batch_max_chars: int = 6000
    translation_max_retries: int = 3
    translation_retry_backoff_seconds: float = 2.0

    qa_enabled: bool = True
    input_cost_per_million_tokens: float = 0.15
    output_cost_per_million_tokens: float = 0.60
