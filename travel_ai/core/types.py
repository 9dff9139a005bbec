"""Shared enums and type aliases used across the service."""
from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import Field

Lat = Annotated[float, Field(ge=-90, le=90)]
Lon = Annotated[float, Field(ge=-180, le=180)]
AqiIndex = Annotated[float, Field(ge=0)]


class ProviderId(str, Enum):
    """LLM backends that can produce structured travel content."""

    GEMINI = "gemini"
    OPENAI = "openai"
    GROK = "grok"

    @property
    def label(self) -> str:
        return self.value.upper()
