"""Typed entry points used by the front end to request travel content."""
from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Sequence, Union

from travel_ai.core.enrichment import Enricher
from travel_ai.core.fetcher import StructuredFetcher
from travel_ai.core.prompts import (
    countries_prompt,
    detailed_city_prompt,
    guides_prompt,
    itinerary_prompt,
    ride_route_prompt,
    states_prompt,
    top_cities_prompt,
)
from travel_ai.core.schemas import (
    City,
    CityInfo,
    Country,
    Guide,
    Itinerary,
    RideRoute,
    State,
    TouristSpot,
    VehicleType,
)
from travel_ai.core.types import ProviderId

logger = logging.getLogger(__name__)

ProviderArg = Union[ProviderId, str]
SpotArg = Union[TouristSpot, str]


def _spot_names(spots: Sequence[SpotArg]) -> str:
    names = [spot.name if isinstance(spot, TouristSpot) else str(spot) for spot in spots]
    return ", ".join(name for name in names if name) or "popular attractions"


class TravelPlanner:
    """Build prompts, fetch structured results and hydrate them.

    Every method returns the hydrated entity or ``None``; failures have
    already been reported through the fetcher's notifier by then.
    """

    def __init__(self, fetcher: StructuredFetcher, enricher: Enricher) -> None:
        self.fetcher = fetcher
        self.enricher = enricher

    async def list_countries(self, provider: ProviderArg = ProviderId.GEMINI) -> Optional[List[Country]]:
        return await self.fetcher.fetch_structured(countries_prompt, List[Country], provider)

    async def list_states(self, country: str, provider: ProviderArg = ProviderId.GEMINI) -> Optional[List[State]]:
        prompt = states_prompt.format(country=country)
        return await self.fetcher.fetch_structured(prompt, List[State], provider)

    async def list_top_cities(
        self,
        state: str,
        country: str,
        provider: ProviderArg = ProviderId.GEMINI,
    ) -> Optional[List[CityInfo]]:
        prompt = top_cities_prompt.format(state=state, country=country)
        cities = await self.fetcher.fetch_structured(prompt, List[CityInfo], provider)
        if cities is None:
            return None
        return await self.enricher.hydrate_cities(cities)

    async def get_detailed_city(self, city_name: str, provider: ProviderArg = ProviderId.GEMINI) -> Optional[City]:
        prompt = detailed_city_prompt.format(city=city_name)
        city = await self.fetcher.fetch_structured(prompt, City, provider)
        if city is None:
            return None
        return await self.enricher.hydrate_city(city)

    async def generate_itinerary(
        self,
        city: str,
        days: int,
        must_visit_spots: Sequence[SpotArg],
        start_date: Union[date, str],
        provider: ProviderArg = ProviderId.GEMINI,
    ) -> Optional[Itinerary]:
        """Plan a ``days``-long itinerary that covers the must-visit spots."""

        if days < 1:
            raise ValueError("An itinerary needs at least one day")

        start = start_date.isoformat() if isinstance(start_date, date) else start_date
        prompt = itinerary_prompt.format(
            days=days,
            city=city,
            start_date=start,
            spot_names=_spot_names(must_visit_spots),
        )
        itinerary = await self.fetcher.fetch_structured(prompt, Itinerary, provider)
        if itinerary is not None and len(itinerary.daily_plans) != days:
            logger.warning(
                "Itinerary for %s has %s daily plans, expected %s",
                city,
                len(itinerary.daily_plans),
                days,
            )
        return itinerary

    async def generate_guides(self, city: str, provider: ProviderArg = ProviderId.GEMINI) -> Optional[List[Guide]]:
        prompt = guides_prompt.format(city=city)
        guides = await self.fetcher.fetch_structured(prompt, List[Guide], provider)
        if guides is None:
            return None
        return await self.enricher.hydrate_guides(guides)

    async def plan_ride(
        self,
        origin: str,
        destination: str,
        vehicle_type: VehicleType,
        stop_interval_km: int,
        provider: ProviderArg = ProviderId.GEMINI,
    ) -> Optional[RideRoute]:
        """Plan a road trip with a stop roughly every ``stop_interval_km``."""

        if vehicle_type not in ("bike", "car"):
            raise ValueError(f"Unsupported vehicle type: {vehicle_type}")
        if stop_interval_km <= 0:
            raise ValueError("Stop interval must be positive")

        prompt = ride_route_prompt.format(
            origin=origin,
            destination=destination,
            vehicle_type=vehicle_type,
            stop_interval_km=stop_interval_km,
        )
        route = await self.fetcher.fetch_structured(prompt, RideRoute, provider)
        if route is None:
            return None
        return await self.enricher.hydrate_route(route)
