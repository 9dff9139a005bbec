"""Post-fetch hydration of AI results with images and live air quality.

Enrichment is additive and best-effort: a failed lookup leaves the field with
its best available value (placeholder image, AI-estimated AQI) and is never
reported to the user. Siblings are hydrated concurrently and reassembled in
their original order; inputs are never mutated.
"""
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from travel_ai.core.schemas import City, CityInfo, Guide, RideRoute, RideStop, TouristSpot
from travel_ai.services.air_quality import AirQualityService
from travel_ai.services.images import ImageFinder, avatar_image

logger = logging.getLogger(__name__)


class Enricher:
    """Attach fields the model cannot reliably provide."""

    def __init__(self, images: ImageFinder, air_quality: AirQualityService) -> None:
        self.images = images
        self.air_quality = air_quality

    async def live_aqi(self, location: str, fallback: Optional[str]) -> Optional[str]:
        reading = await self.air_quality.realtime(location)
        return reading.label if reading else fallback

    async def hydrate_cities(self, cities: List[CityInfo]) -> List[CityInfo]:
        images = await asyncio.gather(
            *(self.images.find(f"{city.name}, {city.country} tourism") for city in cities)
        )
        return [city.model_copy(update={"image": image}) for city, image in zip(cities, images)]

    async def _hydrate_spot(self, spot: TouristSpot, city: City) -> TouristSpot:
        image, aqi = await asyncio.gather(
            self.images.find(f"{spot.name} {city.name}"),
            self.live_aqi(f"{spot.name}, {city.name}, {city.country}", spot.aqi),
        )
        return spot.model_copy(update={"image": image, "aqi": aqi})

    async def hydrate_city(self, city: City) -> City:
        city_image, spots = await asyncio.gather(
            self.images.find(f"{city.name}, {city.country} travel"),
            asyncio.gather(*(self._hydrate_spot(spot, city) for spot in city.spots)),
        )
        return city.model_copy(update={"image": city_image, "spots": list(spots)})

    async def hydrate_guides(self, guides: List[Guide]) -> List[Guide]:
        return [guide.model_copy(update={"image": avatar_image(guide.name)}) for guide in guides]

    async def _hydrate_stop(self, stop: RideStop) -> RideStop:
        reading = await self.air_quality.realtime(stop.name)
        if reading is None:
            return stop.model_copy()
        return stop.model_copy(update={"aqi": reading.label, "coordinates": reading.coordinates})

    async def hydrate_route(self, route: RideRoute) -> RideRoute:
        stops = await asyncio.gather(*(self._hydrate_stop(stop) for stop in route.stops))
        return route.model_copy(update={"stops": list(stops)})
