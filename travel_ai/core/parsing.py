"""Turn raw provider text into JSON and validated pydantic objects."""
from __future__ import annotations

import json
import logging
import re
from functools import lru_cache
from typing import Any, List, Optional, TypeVar, get_origin

from pydantic import TypeAdapter, ValidationError

from travel_ai.core.errors import MalformedResponseError
from travel_ai.core.types import ProviderId

logger = logging.getLogger(__name__)

T = TypeVar("T")

SNIPPET_LENGTH = 200
_FENCE_PATTERN = re.compile(r"```json\n?|\n?```")
_CODE_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)


def snippet(text: Optional[str], length: int = SNIPPET_LENGTH) -> str:
    if not text:
        return ""
    text = text.strip()
    return text if len(text) <= length else f"{text[:length]}..."


def strip_code_fences(text: str) -> str:
    """Remove markdown code-fence wrapping such as ```json ... ```."""

    return _FENCE_PATTERN.sub("", text).strip()


def message_text(content: Any) -> Optional[str]:
    """Flatten LangChain message content into a single string."""

    if content is None:
        return None
    if isinstance(content, str):
        return content
    if isinstance(content, dict):
        if content.get("type") == "text":
            return content.get("text", "")
        try:
            return json.dumps(content)
        except (TypeError, ValueError):
            return str(content)
    if isinstance(content, list):
        text_chunks: List[str] = []
        for chunk in content:
            if isinstance(chunk, dict) and chunk.get("type") == "text":
                text_chunks.append(chunk.get("text", ""))
            elif isinstance(chunk, str):
                text_chunks.append(chunk)
        return "".join(text_chunks) if text_chunks else None
    return str(content)


def _json_candidates(raw_text: str) -> List[str]:
    candidates: List[str] = []
    cleaned = strip_code_fences(raw_text)
    if cleaned:
        candidates.append(cleaned)

    # Fenced blocks surrounded by prose
    for match in _CODE_BLOCK_PATTERN.finditer(raw_text):
        block = match.group(1).strip()
        if block:
            candidates.append(block)

    # Outermost JSON object/array within the text
    start_positions = [idx for idx in (cleaned.find("{"), cleaned.find("[")) if idx != -1]
    if start_positions:
        start_idx = min(start_positions)
        closing_char = "}" if cleaned[start_idx] == "{" else "]"
        end_idx = cleaned.rfind(closing_char)
        if end_idx > start_idx:
            candidates.append(cleaned[start_idx : end_idx + 1])

    return list(dict.fromkeys(candidates))


def parse_json_text(raw_text: str, provider: ProviderId) -> Any:
    """Parse provider output as JSON after stripping code fences.

    Raises:
        MalformedResponseError: if no candidate decodes as JSON.
    """

    last_error: Optional[json.JSONDecodeError] = None
    for candidate in _json_candidates(raw_text or ""):
        try:
            return json.loads(candidate)
        except json.JSONDecodeError as exc:
            last_error = exc

    detail = str(last_error) if last_error else "empty response body"
    raise MalformedResponseError(
        provider,
        f"Response was not valid JSON ({detail})",
        snippet=snippet(raw_text),
    )


@lru_cache(maxsize=None)
def type_adapter(shape: Any) -> TypeAdapter:
    return TypeAdapter(shape)


def _unwrap_list_envelope(data: Any, shape: Any) -> Any:
    # JSON-object mode wraps arrays, e.g. {"countries": [...]}
    if get_origin(shape) is list and isinstance(data, dict) and len(data) == 1:
        (value,) = data.values()
        if isinstance(value, list):
            return value
    return data


def validate_shape(data: Any, shape: Any, provider: ProviderId, raw_text: Optional[str] = None) -> Any:
    """Validate decoded JSON against ``shape``.

    A list shape also accepts a single-key object wrapping the list.

    Raises:
        MalformedResponseError: if the data does not conform to the shape.
    """

    try:
        return type_adapter(shape).validate_python(_unwrap_list_envelope(data, shape))
    except ValidationError as exc:
        raise MalformedResponseError(
            provider,
            f"Response did not match the expected shape ({exc.error_count()} validation errors)",
            snippet=snippet(raw_text if raw_text is not None else json.dumps(data, default=str)),
        ) from exc


def to_payload(value: Any, shape: Any) -> Any:
    """Dump a validated object into JSON-compatible data using wire aliases."""

    return type_adapter(shape).dump_python(value, mode="json", by_alias=True)
