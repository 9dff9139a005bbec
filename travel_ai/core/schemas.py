"""Pydantic data models for AI-generated travel content.

Every model doubles as the shape descriptor handed to the LLM providers: the
JSON schema generated from a model (by alias) is either used as a constrained
decoding schema or serialised into the prompt. Attributes are snake_case in
Python and camelCase on the wire, matching what the browser front end expects.

Fields that the model cannot reliably produce (images, live coordinates) are
wrapped in ``SkipJsonSchema`` so they never appear in the generation schema;
they are attached afterwards by the enrichment pipeline.

Key model categories:
- Country / State / CityInfo: destination browsing lists
- City + TouristSpot: detailed city view with live air quality
- Itinerary + DailyPlan: day-by-day plans with timed activities
- Guide: fictional guides available for hire
- RideRoute + RideStop: road-trip plans with periodic stops
"""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic.json_schema import SkipJsonSchema

from travel_ai.core.types import AqiIndex, Lat, Lon


class WireModel(BaseModel):
    """Base model using camelCase aliases for (de)serialisation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Coordinates(WireModel):
    lat: Lat
    lng: Lon


class AirQualityReading(WireModel):
    """A live air-quality measurement for a named location."""

    location: str
    coordinates: Coordinates
    index: AqiIndex
    category: str
    label: str = Field(description='Display label, e.g. "AQI 45 (Good)"')


class Country(WireModel):
    name: str
    code: str = Field(description="Two-letter ISO 3166-1 alpha-2 code.")


class State(WireModel):
    name: str


class CityInfo(WireModel):
    """A city in a browsing list, before its full details are fetched."""

    name: str
    country: str
    image: SkipJsonSchema[Optional[str]] = None
    description: SkipJsonSchema[Optional[str]] = None
    aqi: SkipJsonSchema[Optional[str]] = None


class TouristSpot(WireModel):
    id: str = Field(
        description="A unique, URL-friendly identifier for the spot (e.g., 'hawa-mahal')."
    )
    name: str
    description: str = Field(
        description="A detailed and engaging description of the spot, around 2-3 sentences long."
    )
    aqi: str = Field(
        description='Current Air Quality Index (e.g., "AQI 45 (Good)"). Estimate based on typical levels.',
    )
    image: SkipJsonSchema[Optional[str]] = None


class City(WireModel):
    """Full city record with its most famous tourist spots."""

    name: str
    country: str
    image: SkipJsonSchema[Optional[str]] = None
    description: SkipJsonSchema[Optional[str]] = None
    aqi: SkipJsonSchema[Optional[str]] = None
    spots: List[TouristSpot] = Field(
        description="A list of 6 + of the most famous tourist spots in the city."
    )


class ItineraryActivity(WireModel):
    time: str
    description: str
    location: str


class ItinerarySpecialEvent(WireModel):
    name: Optional[str] = None
    location: Optional[str] = None
    details: Optional[str] = Field(
        default=None,
        description="Details including timing and why it's recommended, relevant to the travel date.",
    )


class DailyPlan(WireModel):
    day: int
    title: str
    activities: List[ItineraryActivity]
    special_event: Optional[ItinerarySpecialEvent] = None


class Itinerary(WireModel):
    trip_title: str
    daily_plans: List[DailyPlan]


class Guide(WireModel):
    name: str
    specialties: List[str] = Field(
        description="A list of 2-3 short specialties (e.g., 'History', 'Foodie')."
    )
    bio: str = Field(description="A short, engaging bio for the guide, 2-3 sentences long.")
    image: SkipJsonSchema[Optional[str]] = None


StopType = Literal["food", "rest", "scenic", "fuel", "city", "town"]
VehicleType = Literal["bike", "car"]


class RideStop(WireModel):
    name: str
    type: StopType
    description: str
    location: str = Field(description="Distance from origin (e.g., '45 km')")
    distance_from_last: str = Field(description="Distance from the previous stop (e.g., '30 km')")
    weather: str = Field(description="Expected weather condition (e.g., 'Sunny, 28°C')")
    aqi: str = Field(description="Air Quality Index (e.g., 'AQI 120 (Unhealthy)')")
    highlights: List[str] = Field(description="List of 2-3 key things to see or do here.")
    coordinates: SkipJsonSchema[Optional[Coordinates]] = None


class RideRoute(WireModel):
    origin: str
    destination: str
    distance: str
    duration: str
    road_condition: str = Field(
        description="Detailed description of road quality, traffic patterns, and any construction."
    )
    safety_tips: List[str] = Field(
        description="3-5 specific safety tips for this route and vehicle type."
    )
    stops: List[RideStop] = Field(
        description="A sequential list of major cities, towns, and pit stops along the route from origin to destination."
    )


__all__ = [
    "AirQualityReading",
    "City",
    "CityInfo",
    "Coordinates",
    "Country",
    "DailyPlan",
    "Guide",
    "Itinerary",
    "ItineraryActivity",
    "ItinerarySpecialEvent",
    "RideRoute",
    "RideStop",
    "State",
    "StopType",
    "TouristSpot",
    "VehicleType",
    "WireModel",
]
