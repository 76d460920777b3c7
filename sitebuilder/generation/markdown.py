"""
Cleanup of model output: markdown code fences and JSON wrapped in prose.
"""
import json
import re
from typing import Any, Dict

from sitebuilder.domain.errors import GenerationError

# ```lang at the start of a line, with trailing whitespace and one newline
_OPENING_FENCE = re.compile(r"^```[a-zA-Z0-9_+-]*[ \t]*\n?", re.MULTILINE)
# ``` at the end of a line, with the newline before it
_CLOSING_FENCE = re.compile(r"\n?```[ \t]*$", re.MULTILINE)
# Only the fence wrapping the whole answer; fences inside string values stay
_JSON_OPENING_FENCE = re.compile(r"^\s*```(?:json)?[ \t]*\n?", re.IGNORECASE)
_JSON_CLOSING_FENCE = re.compile(r"\n?```\s*$")
_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def _strip_once(text: str) -> str:
    text = _OPENING_FENCE.sub("", text)
    text = _CLOSING_FENCE.sub("", text)
    return text.strip()


def strip_code_fences(text: str) -> str:
    """
    Remove markdown code fences (with optional language tag) from generated code.

    Repeats until nothing changes, so stripping an already stripped string
    returns it unchanged. Non-string and empty values are returned as is.
    """
    if not text or not isinstance(text, str):
        return text

    cleaned = text.strip()
    while True:
        stripped = _strip_once(cleaned)
        if stripped == cleaned:
            return stripped
        cleaned = stripped


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Parse the JSON object a model was asked to return.

    Strategy:
    1. Drop the ```json fence around the answer and try json.loads
    2. Fall back to the outermost {...} span

    Raises:
        GenerationError: if no JSON object can be recovered
    """
    if not text or not isinstance(text, str):
        raise GenerationError("AI response was empty")

    cleaned = _JSON_CLOSING_FENCE.sub("", _JSON_OPENING_FENCE.sub("", text)).strip()

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        match = _JSON_OBJECT.search(cleaned)
        if not match:
            raise GenerationError("No valid JSON found in AI response")
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError as exc:
            raise GenerationError(f"Failed to parse AI response as JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise GenerationError("AI response JSON is not an object")
    return data
