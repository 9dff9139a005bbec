"""Tests for image and air-quality hydration."""
from __future__ import annotations

from unittest.mock import AsyncMock, Mock

import pytest

from travel_ai.core.enrichment import Enricher
from travel_ai.core.schemas import (
    AirQualityReading,
    City,
    CityInfo,
    Coordinates,
    Guide,
    RideRoute,
    RideStop,
    TouristSpot,
)


def _reading(location: str, index: float = 45) -> AirQualityReading:
    return AirQualityReading(
        location=location,
        coordinates=Coordinates(lat=26.9, lng=75.8),
        index=index,
        category="Good",
        label=f"AQI {int(index)} (Good)",
    )


@pytest.fixture
def images():
    finder = Mock()
    finder.find = AsyncMock(side_effect=lambda query: f"https://img.example/{query.replace(' ', '_')}")
    return finder


@pytest.fixture
def air_quality():
    service = Mock()
    service.realtime = AsyncMock(side_effect=lambda location: _reading(location))
    return service


@pytest.fixture
def enricher(images, air_quality):
    return Enricher(images, air_quality)


def _city(spot_aqi="AQI 80 (Moderate)") -> City:
    return City(
        name="Jaipur",
        country="India",
        spots=[
            TouristSpot(id="hawa-mahal", name="Hawa Mahal", description="Palace of winds.", aqi=spot_aqi),
            TouristSpot(id="amber-fort", name="Amber Fort", description="Hill fort.", aqi=spot_aqi),
        ],
    )


async def test_hydrate_cities_attaches_images_in_order(enricher, images):
    cities = [CityInfo(name="Jaipur", country="India"), CityInfo(name="Udaipur", country="India")]

    hydrated = await enricher.hydrate_cities(cities)

    assert [c.name for c in hydrated] == ["Jaipur", "Udaipur"]
    assert hydrated[0].image == "https://img.example/Jaipur,_India_tourism"
    assert cities[0].image is None


async def test_hydrate_city_uses_live_aqi_and_spot_queries(enricher, images, air_quality):
    city = _city(spot_aqi="AQI 80 (Moderate)")

    hydrated = await enricher.hydrate_city(city)

    assert hydrated.image == "https://img.example/Jaipur,_India_travel"
    assert [s.id for s in hydrated.spots] == ["hawa-mahal", "amber-fort"]
    assert hydrated.spots[0].image == "https://img.example/Hawa_Mahal_Jaipur"
    assert hydrated.spots[0].aqi == "AQI 45 (Good)"
    air_quality.realtime.assert_any_await("Hawa Mahal, Jaipur, India")
    assert city.spots[0].aqi == "AQI 80 (Moderate)"


async def test_failed_aqi_lookup_keeps_model_estimate(enricher, air_quality):
    air_quality.realtime.side_effect = None
    air_quality.realtime.return_value = None

    hydrated = await enricher.hydrate_city(_city(spot_aqi="AQI 80 (Moderate)"))

    assert all(spot.aqi == "AQI 80 (Moderate)" for spot in hydrated.spots)
    assert all(spot.image for spot in hydrated.spots)


async def test_hydrate_guides_uses_generated_avatars(enricher, images):
    guides = [Guide(name="Asha Rao", specialties=["History"], bio="Local historian.")]

    hydrated = await enricher.hydrate_guides(guides)

    assert hydrated[0].image.startswith("https://ui-avatars.com/api/?name=Asha+Rao")
    images.find.assert_not_called()


def _route() -> RideRoute:
    stop = dict(
        type="food",
        description="Dhaba stop.",
        location="45 km",
        distance_from_last="45 km",
        weather="Sunny, 28°C",
        highlights=["Parathas"],
    )
    return RideRoute(
        origin="Delhi",
        destination="Jaipur",
        distance="280 km",
        duration="5 hours",
        road_condition="Good highway.",
        safety_tips=["Wear a helmet"],
        stops=[
            RideStop(name="Neemrana", aqi="AQI 150 (Unhealthy for Sensitive Groups)", **stop),
            RideStop(name="Behror", aqi="AQI 95 (Moderate)", **stop),
        ],
    )


async def test_hydrate_route_sets_aqi_and_coordinates(enricher, air_quality):
    hydrated = await enricher.hydrate_route(_route())

    assert [s.name for s in hydrated.stops] == ["Neemrana", "Behror"]
    assert hydrated.stops[0].aqi == "AQI 45 (Good)"
    assert hydrated.stops[1].coordinates == Coordinates(lat=26.9, lng=75.8)


async def test_hydrate_route_keeps_stop_when_lookup_fails(enricher, air_quality):
    air_quality.realtime.side_effect = lambda location: None if location == "Neemrana" else _reading(location)

    hydrated = await enricher.hydrate_route(_route())

    assert hydrated.stops[0].aqi == "AQI 150 (Unhealthy for Sensitive Groups)"
    assert hydrated.stops[0].coordinates is None
    assert hydrated.stops[1].aqi == "AQI 45 (Good)"
