from pathlib import Path

from doc_translator.translation.exceptions import TranslationError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"

TRANSLATE_PROMPT = "translate_prompt.txt"
QA_PROMPT = "qa_prompt.txt"


def load_prompt_template(name: str, path: Path | None = None) -> str:
    """Load a prompt template from a file.

    Args:
        name: File name of a bundled template (TRANSLATE_PROMPT or QA_PROMPT).
        path: Explicit template path; overrides ``name`` when given.

    Returns:
        The raw template string with placeholders.

    Raises:
        TranslationError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / name
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TranslationError(f"Failed to load prompt template: {exc}") from exc
