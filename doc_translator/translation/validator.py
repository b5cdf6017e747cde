"""Turns raw provider responses into id -> text mappings."""

import json
from typing import Any

from doc_translator.logging.logger import Log
from doc_translator.translation.exceptions import TranslationValidationError


def parse_json_object(raw: str) -> dict[str, Any]:
    """Parse a JSON object, tolerating markdown code fences around it.

    Raises:
        TranslationValidationError: if the text is not a JSON object.
    """
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise TranslationValidationError(f"Invalid JSON response: {exc}") from exc

    if not isinstance(parsed, dict):
        raise TranslationValidationError("JSON response must be an object")
    return parsed


def parse_translations(data: dict[str, Any], expected_ids: set[int]) -> dict[int, str]:
    """Extract ``{"translations": [{"id", "text"}]}`` entries for known ids."""
    return _collect(data, "translations", "text", expected_ids)


def parse_issues(data: dict[str, Any], expected_ids: set[int]) -> dict[int, str]:
    """Extract ``{"issues": [{"id", "revised"}]}`` entries for known ids."""
    return _collect(data, "issues", "revised", expected_ids)


def _collect(
    data: dict[str, Any],
    list_key: str,
    text_key: str,
    expected_ids: set[int],
) -> dict[int, str]:
    items = data.get(list_key)
    if not isinstance(items, list):
        raise TranslationValidationError(f"'{list_key}' must be a list")

    result: dict[int, str] = {}
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            Log.warning(f"Skipping {list_key}[{index}]: not an object")
            continue
        segment_id = _coerce_id(item.get("id"))
        text = item.get(text_key)
        if segment_id is None or not isinstance(text, str):
            Log.warning(f"Skipping {list_key}[{index}]: missing 'id' or '{text_key}'")
            continue
        if segment_id not in expected_ids:
            Log.warning(f"Skipping {list_key}[{index}]: unexpected segment id {segment_id}")
            continue
        result[segment_id] = text
    return result


def _coerce_id(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and raw.strip().isdigit():
        return int(raw.strip())
    return None
