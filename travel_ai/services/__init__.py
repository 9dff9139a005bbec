"""External service integrations for the travel planner.

This package provides clients for the services the planner talks to:

- Providers: Gemini, OpenAI and Grok chat models behind one adapter contract
- Images: Google Custom Search with a Wikipedia thumbnail fallback
- Geocoding: Place name to coordinates resolution
- Air quality: Current US AQI readings for named places

Example Usage:
    >>> from travel_ai.services import build_adapters
    >>> from travel_ai.core.config import ApiSettings
    >>>
    >>> settings = ApiSettings.from_env()
    >>> adapters = build_adapters(settings)
"""

# LLM providers
from travel_ai.services.providers import (
    GeminiAdapter,
    GrokAdapter,
    OpenAIAdapter,
    ProviderAdapter,
    build_adapters,
)

# Image lookup
from travel_ai.services.images import ImageFinder, avatar_image, placeholder_image

# Geocoding
from travel_ai.services.geocoding import geocode

# Air quality
from travel_ai.services.air_quality import AirQualityService, aqi_category, format_aqi

__all__ = [
    # Providers
    "GeminiAdapter",
    "GrokAdapter",
    "OpenAIAdapter",
    "ProviderAdapter",
    "build_adapters",
    # Images
    "ImageFinder",
    "avatar_image",
    "placeholder_image",
    # Geocoding
    "geocode",
    # Air quality
    "AirQualityService",
    "aqi_category",
    "format_aqi",
]
