"""JSON-schema helpers for shape descriptors handed to LLM providers."""
from __future__ import annotations

import copy
import json
from typing import Any, Dict

from travel_ai.core.parsing import type_adapter


def inline_schema_refs(schema: Dict[str, Any]) -> Dict[str, Any]:
    """Resolve local ``$ref`` pointers so the schema is self-contained.

    Constrained-decoding backends reject ``$defs``; the travel models are
    acyclic so a straightforward substitution is enough.
    """

    definitions = schema.get("$defs", {})

    def resolve(node: Any) -> Any:
        if isinstance(node, dict):
            ref = node.get("$ref")
            if isinstance(ref, str) and ref.startswith("#/$defs/"):
                target = copy.deepcopy(definitions[ref.split("/")[-1]])
                extra = {k: v for k, v in node.items() if k != "$ref"}
                return resolve({**target, **extra})
            return {key: resolve(value) for key, value in node.items() if key != "$defs"}
        if isinstance(node, list):
            return [resolve(item) for item in node]
        return node

    return resolve(schema)


def shape_json_schema(shape: Any) -> Dict[str, Any]:
    """Return the inlined JSON schema (by alias) for a shape descriptor."""

    return inline_schema_refs(type_adapter(shape).json_schema(by_alias=True))


def schema_instructions(shape: Any) -> str:
    """Render the schema as prompt text for providers without constrained output."""

    schema = json.dumps(shape_json_schema(shape), indent=2, ensure_ascii=False)
    return f"Output strictly in this JSON schema format:\n{schema}"
