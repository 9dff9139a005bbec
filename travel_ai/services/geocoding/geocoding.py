"""Small helpers for using the public Open-Meteo geocoding service."""
from __future__ import annotations

import logging

import httpx

from travel_ai.core.errors import EnrichmentLookupError
from travel_ai.core.schemas import Coordinates

logger = logging.getLogger(__name__)

GEOCODING_API_URL = "https://geocoding-api.open-meteo.com/v1/search"


async def geocode(client: httpx.AsyncClient, location: str) -> Coordinates:
    """Return the coordinates of the best match for ``location``.

    Raises:
        EnrichmentLookupError: on empty input, transport errors, timeouts, or
            when the service knows no matching place.
    """

    if not location or not location.strip():
        raise EnrichmentLookupError("Cannot geocode an empty location")

    try:
        response = await client.get(
            GEOCODING_API_URL,
            params={"name": location.strip(), "count": 1, "language": "en", "format": "json"},
        )
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        raise EnrichmentLookupError(f"Geocoding failed for {location!r}: {exc}") from exc

    results = data.get("results") if isinstance(data, dict) else None
    if not results or not isinstance(results, list):
        raise EnrichmentLookupError(f"No geocoding result for {location!r}")

    try:
        first = results[0]
        return Coordinates(lat=first["latitude"], lng=first["longitude"])
    except (KeyError, TypeError, ValueError) as exc:
        raise EnrichmentLookupError(f"Unexpected geocoding payload for {location!r}") from exc
