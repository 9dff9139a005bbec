"""LLM provider adapters.

Each adapter turns a prompt and a shape descriptor into a single chat call and
returns the raw response text:

- GeminiAdapter: constrained JSON decoding with the shape's JSON schema
- OpenAIAdapter: JSON mode plus the schema serialised into the prompt
- GrokAdapter: schema serialised into the prompt only

Public API:
    - build_adapters: Factory creating one adapter per provider
    - ProviderAdapter: Base class for new backends
"""
from travel_ai.services.providers.adapters import (
    ADAPTER_TYPES,
    GeminiAdapter,
    GrokAdapter,
    OpenAIAdapter,
    build_adapters,
)
from travel_ai.services.providers.base import ProviderAdapter, classify_provider_exception
from travel_ai.services.providers.schemas import schema_instructions, shape_json_schema

__all__ = [
    "ADAPTER_TYPES",
    "GeminiAdapter",
    "GrokAdapter",
    "OpenAIAdapter",
    "ProviderAdapter",
    "build_adapters",
    "classify_provider_exception",
    "schema_instructions",
    "shape_json_schema",
]
