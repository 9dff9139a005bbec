"""End-to-end tests for the planner entry points with scripted providers."""
from __future__ import annotations

import json
from datetime import date
from unittest.mock import AsyncMock, Mock

import pytest
from conftest import ScriptedAdapter

from travel_ai.core.enrichment import Enricher
from travel_ai.core.planner import TravelPlanner
from travel_ai.core.schemas import TouristSpot
from travel_ai.core.types import ProviderId

JAIPUR_ITINERARY = {
    "tripTitle": "Three Days in the Pink City",
    "dailyPlans": [
        {
            "day": day,
            "title": title,
            "activities": [
                {"time": "09:00", "description": f"Visit {title}", "location": title},
                {"time": "13:00", "description": "Lunch", "location": "Old City"},
            ],
            "specialEvent": {"name": "Folk music", "location": "Chokhi Dhani", "details": "7pm nightly"},
        }
        for day, title in ((1, "Hawa Mahal"), (2, "Amber Fort"), (3, "City Palace"))
    ],
}

JAIPUR_CITY = {
    "name": "Jaipur",
    "country": "India",
    "spots": [
        {"id": "hawa-mahal", "name": "Hawa Mahal", "description": "Palace of winds.", "aqi": "AQI 90 (Moderate)"},
        {"id": "amber-fort", "name": "Amber Fort", "description": "Hill fort.", "aqi": "AQI 85 (Moderate)"},
    ],
}

ROUTE = {
    "origin": "Delhi",
    "destination": "Jaipur",
    "distance": "280 km",
    "duration": "5 hours",
    "roadCondition": "Six-lane expressway.",
    "safetyTips": ["Avoid night riding"],
    "stops": [
        {
            "name": "Neemrana",
            "type": "food",
            "description": "Fort palace and dhabas.",
            "location": "120 km",
            "distanceFromLast": "120 km",
            "weather": "Sunny, 30°C",
            "aqi": "AQI 110 (Unhealthy for Sensitive Groups)",
            "highlights": ["Neemrana Fort"],
        }
    ],
}


@pytest.fixture
def enricher():
    images = Mock()
    images.find = AsyncMock(return_value="https://img.example/photo.jpg")
    air_quality = Mock()
    air_quality.realtime = AsyncMock(return_value=None)
    return Enricher(images, air_quality)


def _planner(make_fetcher, enricher, adapter):
    return TravelPlanner(make_fetcher({adapter.provider: adapter}), enricher)


async def test_jaipur_itinerary_is_cached(make_fetcher, enricher, notifier):
    adapter = ScriptedAdapter(ProviderId.GEMINI, [json.dumps(JAIPUR_ITINERARY)])
    planner = _planner(make_fetcher, enricher, adapter)
    spots = [
        TouristSpot(id="hawa-mahal", name="Hawa Mahal", description="x", aqi="AQI 90 (Moderate)"),
        TouristSpot(id="amber-fort", name="Amber Fort", description="y", aqi="AQI 85 (Moderate)"),
    ]

    first = await planner.generate_itinerary("Jaipur", 3, spots, date(2025, 11, 1))
    second = await planner.generate_itinerary("Jaipur", 3, spots, date(2025, 11, 1))

    assert len(first.daily_plans) == 3
    assert first.daily_plans[0].special_event.name == "Folk music"
    assert second == first
    assert len(adapter.calls) == 1
    assert notifier.messages == []

    prompt = adapter.calls[0]["prompt"]
    assert "3-day itinerary for Jaipur, starting 2025-11-01" in prompt
    assert "must-visit spots are: Hawa Mahal, Amber Fort." in prompt


async def test_itinerary_without_spots_asks_for_popular_attractions(make_fetcher, enricher):
    adapter = ScriptedAdapter(ProviderId.GEMINI, [json.dumps(JAIPUR_ITINERARY)])
    planner = _planner(make_fetcher, enricher, adapter)

    await planner.generate_itinerary("Jaipur", 3, [], "2025-11-01")

    assert "must-visit spots are: popular attractions." in adapter.calls[0]["prompt"]


async def test_itinerary_rejects_zero_days(make_fetcher, enricher):
    planner = _planner(make_fetcher, enricher, ScriptedAdapter(ProviderId.GEMINI, ["{}"]))

    with pytest.raises(ValueError):
        await planner.generate_itinerary("Jaipur", 0, [], "2025-11-01")


async def test_detailed_city_is_hydrated(make_fetcher, enricher):
    adapter = ScriptedAdapter(ProviderId.OPENAI, [json.dumps(JAIPUR_CITY)])
    planner = _planner(make_fetcher, enricher, adapter)

    city = await planner.get_detailed_city("Jaipur", ProviderId.OPENAI)

    assert city.image == "https://img.example/photo.jpg"
    assert [spot.aqi for spot in city.spots] == ["AQI 90 (Moderate)", "AQI 85 (Moderate)"]
    assert '"Jaipur"' in adapter.calls[0]["prompt"]


async def test_failed_fetch_skips_enrichment(make_fetcher, enricher, notifier):
    adapter = ScriptedAdapter(ProviderId.GROK, ["no json here"])
    planner = _planner(make_fetcher, enricher, adapter)

    assert await planner.list_top_cities("Rajasthan", "India", ProviderId.GROK) is None
    enricher.images.find.assert_not_called()
    assert len(notifier.messages) == 1


async def test_top_cities_get_images(make_fetcher, enricher):
    reply = json.dumps([{"name": "Jaipur", "country": "India"}, {"name": "Udaipur", "country": "India"}])
    planner = _planner(make_fetcher, enricher, ScriptedAdapter(ProviderId.GEMINI, [reply]))

    cities = await planner.list_top_cities("Rajasthan", "India")

    assert [c.name for c in cities] == ["Jaipur", "Udaipur"]
    assert all(c.image for c in cities)


async def test_states_and_countries(make_fetcher, enricher):
    adapter = ScriptedAdapter(ProviderId.GEMINI, [json.dumps([{"name": "Rajasthan"}])])
    planner = _planner(make_fetcher, enricher, adapter)

    states = await planner.list_states("India")

    assert states[0].name == "Rajasthan"
    assert adapter.calls[0]["prompt"] == "List all major states/provinces/regions for India, sorted alphabetically."


async def test_guides_get_avatars(make_fetcher, enricher):
    reply = json.dumps([{"name": "Asha Rao", "specialties": ["History"], "bio": "Historian."}])
    planner = _planner(make_fetcher, enricher, ScriptedAdapter(ProviderId.GEMINI, [reply]))

    guides = await planner.generate_guides("Jaipur")

    assert guides[0].image.startswith("https://ui-avatars.com/api/?name=Asha+Rao")


async def test_plan_ride(make_fetcher, enricher):
    adapter = ScriptedAdapter(ProviderId.GEMINI, [json.dumps(ROUTE)])
    planner = _planner(make_fetcher, enricher, adapter)

    route = await planner.plan_ride("Delhi", "Jaipur", "bike", 100)

    assert route.stops[0].name == "Neemrana"
    assert route.stops[0].aqi == "AQI 110 (Unhealthy for Sensitive Groups)"
    assert "approximately every 100 km" in adapter.calls[0]["prompt"]
    assert "by bike" in adapter.calls[0]["prompt"]


@pytest.mark.parametrize("vehicle, interval", [("truck", 50), ("car", 0)])
async def test_plan_ride_validates_arguments(make_fetcher, enricher, vehicle, interval):
    planner = _planner(make_fetcher, enricher, ScriptedAdapter(ProviderId.GEMINI, ["{}"]))

    with pytest.raises(ValueError):
        await planner.plan_ride("Delhi", "Jaipur", vehicle, interval)
