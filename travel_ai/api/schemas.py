from datetime import date
from typing import List

from pydantic import Field

from travel_ai.core.schemas import VehicleType, WireModel
from travel_ai.core.types import ProviderId


class ItineraryRequest(WireModel):
    """Request payload used to generate a day-by-day itinerary."""

    city: str = Field(..., min_length=1, description="Destination city")
    days: int = Field(..., ge=1, le=30, description="Number of days to plan")
    must_visit_spots: List[str] = Field(
        default_factory=list,
        description="Names of the spots the traveller selected.",
    )
    start_date: date = Field(..., description="First day of the trip")
    provider: ProviderId = ProviderId.GEMINI


class RideRequest(WireModel):
    """Request payload used to plan a road trip."""

    origin: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    vehicle_type: VehicleType = "car"
    stop_interval_km: int = Field(default=50, gt=0, description="Desired distance between stops")
    provider: ProviderId = ProviderId.GEMINI


class FailureResponse(WireModel):
    """Body returned when the selected provider produced no result."""

    detail: str
    notifications: List[str] = Field(default_factory=list)
