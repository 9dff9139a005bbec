"""Exception hierarchy for the structured fetch and enrichment layers."""
from __future__ import annotations

from typing import Optional

from travel_ai.core.types import ProviderId


class TravelAIError(Exception):
    """Base class for all errors raised inside the service."""


class FetchError(TravelAIError):
    """A structured fetch against an LLM provider failed."""

    def __init__(self, provider: ProviderId, message: str) -> None:
        super().__init__(message)
        self.provider = provider
        self.message = message

    def user_message(self) -> str:
        return f"{self.provider.label} Error: {self.message}"


class ProviderError(FetchError):
    """Transport, authentication, or empty-response failure from a provider."""


class RateLimitError(ProviderError):
    """The provider rejected the call because of rate limits or quota."""

    def user_message(self) -> str:
        return f"{self.provider.label} API quota exceeded. Please try again later."


class MalformedResponseError(FetchError):
    """The provider returned text that is not valid, shape-conformant JSON."""

    def __init__(self, provider: ProviderId, message: str, snippet: Optional[str] = None) -> None:
        super().__init__(provider, message)
        self.snippet = snippet


class EnrichmentLookupError(TravelAIError):
    """An image, geocode, or air-quality lookup failed."""


class CacheIOError(TravelAIError):
    """Reading from or writing to the cache store failed."""
