"""Live air-quality readings from the Open-Meteo air-quality API."""
from __future__ import annotations

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from travel_ai.core.errors import EnrichmentLookupError
from travel_ai.core.schemas import AirQualityReading, Coordinates
from travel_ai.services.geocoding import geocode

logger = logging.getLogger(__name__)

AQI_API_URL = "https://air-quality-api.open-meteo.com/v1/air-quality"

# Upper bounds (inclusive) of the US AQI categories
AQI_CATEGORIES = (
    (50, "Good"),
    (100, "Moderate"),
    (150, "Unhealthy for Sensitive Groups"),
    (200, "Unhealthy"),
    (300, "Very Unhealthy"),
)


def aqi_category(index: float) -> str:
    """Map a numeric US AQI value to its severity label."""

    for upper_bound, label in AQI_CATEGORIES:
        if index <= upper_bound:
            return label
    return "Hazardous"


def format_aqi(index: float) -> str:
    """Return the display label used on spots and stops, e.g. ``AQI 45 (Good)``."""

    value = int(index) if float(index).is_integer() else round(index, 1)
    return f"AQI {value} ({aqi_category(index)})"


async def current_us_aqi(client: httpx.AsyncClient, coordinates: Coordinates) -> float:
    """Query the current US AQI at ``coordinates``.

    Raises:
        EnrichmentLookupError: when the request fails or carries no reading.
    """

    try:
        response = await client.get(
            AQI_API_URL,
            params={"latitude": coordinates.lat, "longitude": coordinates.lng, "current": "us_aqi"},
        )
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        raise EnrichmentLookupError(
            f"AQI lookup failed for {coordinates.lat},{coordinates.lng}: {exc}"
        ) from exc

    current = data.get("current") if isinstance(data, dict) else None
    value = current.get("us_aqi") if isinstance(current, dict) else None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise EnrichmentLookupError(f"No AQI reading for {coordinates.lat},{coordinates.lng}")
    return float(value)


class AirQualityService:
    """Geocode-then-query chain producing readings for named places."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def lookup(self, location: str) -> AirQualityReading:
        """Return the live reading for ``location``.

        Raises:
            EnrichmentLookupError: if geocoding or the AQI query fails.
        """

        coordinates = await geocode(self._client, location)
        index = await current_us_aqi(self._client, coordinates)
        try:
            return AirQualityReading(
                location=location,
                coordinates=coordinates,
                index=index,
                category=aqi_category(index),
                label=format_aqi(index),
            )
        except ValidationError as exc:
            raise EnrichmentLookupError(f"Invalid AQI reading {index} for {location!r}") from exc

    async def realtime(self, location: str) -> Optional[AirQualityReading]:
        """Like :meth:`lookup` but returns ``None`` instead of raising."""

        try:
            return await self.lookup(location)
        except EnrichmentLookupError as exc:
            logger.warning("Real-time AQI unavailable for %r: %s", location, exc)
            return None
