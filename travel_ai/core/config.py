"""Configuration helpers for API keys and environment variables."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Literal, Mapping, Optional

from travel_ai.core.types import ProviderId

logger = logging.getLogger(__name__)

# Keys used by the browser front end when a user pastes their own credentials.
OVERRIDE_KEYS: Dict[ProviderId, str] = {
    ProviderId.GEMINI: "GEMINI_API_KEY",
    ProviderId.OPENAI: "OPENAI_API_KEY",
    ProviderId.GROK: "GROK_API_KEY",
}


@dataclass(slots=True)
class ApiSettings:
    """Centralised container for the external service credentials."""

    gemini_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    xai_api_key: Optional[str] = None
    google_search_api_key: Optional[str] = None
    google_cx: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    openai_model: str = "gpt-4o-mini"
    grok_model: str = "grok-beta"
    cache_dir: Optional[str] = None
    overrides_path: Optional[str] = None
    http_timeout_s: float = 12.0

    @classmethod
    def from_env(cls) -> "ApiSettings":
        """Load settings from the process environment."""

        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY"),
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            xai_api_key=os.getenv("GROK_API_KEY") or os.getenv("XAI_API_KEY"),
            google_search_api_key=os.getenv("GOOGLE_SEARCH_API_KEY"),
            google_cx=os.getenv("GOOGLE_CX"),
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            grok_model=os.getenv("GROK_MODEL", "grok-beta"),
            cache_dir=os.getenv("TRAVEL_AI_CACHE_DIR"),
            overrides_path=os.getenv("TRAVEL_AI_KEY_OVERRIDES"),
            http_timeout_s=float(os.getenv("TRAVEL_AI_HTTP_TIMEOUT", "12")),
        )

    def default_key(self, provider: ProviderId) -> Optional[str]:
        if provider is ProviderId.GEMINI:
            return self.gemini_api_key
        if provider is ProviderId.OPENAI:
            return self.openai_api_key
        return self.xai_api_key

    def model_name(self, provider: ProviderId) -> str:
        if provider is ProviderId.GEMINI:
            return self.gemini_model
        if provider is ProviderId.OPENAI:
            return self.openai_model
        return self.grok_model


@dataclass(frozen=True, slots=True)
class ProviderCredentials:
    """Credentials resolved once for a single provider."""

    provider: ProviderId
    api_key: Optional[str]
    model: str
    source: Literal["override", "environment", "missing"]

    @property
    def available(self) -> bool:
        return bool(self.api_key)


def load_key_overrides(path: Optional[str]) -> Dict[str, str]:
    """Read user-supplied API key overrides from a JSON file.

    A missing or unreadable file simply yields no overrides.
    """

    if not path:
        return {}
    file_path = Path(path)
    if not file_path.exists():
        return {}
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable key overrides at %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring key overrides at %s: expected a JSON object", path)
        return {}
    return {str(key): str(value) for key, value in data.items() if value}


def resolve_credentials(
    settings: ApiSettings,
    provider: ProviderId,
    overrides: Optional[Mapping[str, str]] = None,
) -> ProviderCredentials:
    """Pick the API key for ``provider``: user override first, then environment."""

    model = settings.model_name(provider)
    override = (overrides or {}).get(OVERRIDE_KEYS[provider])
    if override:
        return ProviderCredentials(provider, override, model, "override")

    default = settings.default_key(provider)
    if default:
        return ProviderCredentials(provider, default, model, "environment")

    return ProviderCredentials(provider, None, model, "missing")
