"""FastAPI surface exposing the travel planner to the browser front end."""
from __future__ import annotations

# Load environment variables from .env file
from dotenv import load_dotenv

# Load .env file before any other imports that might need environment variables
load_dotenv()


import logging
from typing import Any, Dict, List, Optional, TypeVar

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from travel_ai.api.dependencies import get_planner_bundle, lifespan
from travel_ai.api.schemas import FailureResponse, ItineraryRequest, RideRequest
from travel_ai.core.schemas import City, CityInfo, Country, Guide, Itinerary, RideRoute, State
from travel_ai.core.types import ProviderId

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

T = TypeVar("T")

app = FastAPI(title="Travel AI API", version="0.1.0", lifespan=lifespan)

origins = [
    "http://localhost:3000",
    "http://localhost:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

FAILURE_RESPONSES: Dict[int | str, Dict[str, Any]] = {502: {"model": FailureResponse}}


def _failure(provider: ProviderId, messages: List[str]) -> JSONResponse:
    body = FailureResponse(
        detail=f"{provider.label} did not return a result",
        notifications=messages,
    )
    return JSONResponse(status_code=502, content=body.model_dump(by_alias=True))


def _respond(result: Optional[T], provider: ProviderId, bundle: Any) -> Any:
    if result is None:
        messages = bundle.notifier.messages()
        logger.warning("No result from %s: %s", provider.value, messages)
        return _failure(provider, messages)
    return result


@app.get("/health")
async def health_check() -> Dict[str, str]:
    """Simple health endpoint used for readiness probes."""

    return {"status": "healthy", "service": "travel-ai-api"}


@app.get("/countries", response_model=List[Country], responses=FAILURE_RESPONSES)
async def list_countries(provider: ProviderId = ProviderId.GEMINI) -> Any:
    bundle = get_planner_bundle()
    bundle.notifier.start()
    countries = await bundle.planner.list_countries(provider)
    return _respond(countries, provider, bundle)


@app.get("/countries/{country}/states", response_model=List[State], responses=FAILURE_RESPONSES)
async def list_states(country: str, provider: ProviderId = ProviderId.GEMINI) -> Any:
    bundle = get_planner_bundle()
    bundle.notifier.start()
    states = await bundle.planner.list_states(country, provider)
    return _respond(states, provider, bundle)


@app.get("/cities", response_model=List[CityInfo], responses=FAILURE_RESPONSES)
async def list_top_cities(
    state: str = Query(..., min_length=1),
    country: str = Query(..., min_length=1),
    provider: ProviderId = ProviderId.GEMINI,
) -> Any:
    """Return the most popular tourist cities of a state, each with an image."""

    bundle = get_planner_bundle()
    bundle.notifier.start()
    cities = await bundle.planner.list_top_cities(state, country, provider)
    return _respond(cities, provider, bundle)


@app.get("/cities/{city_name}", response_model=City, responses=FAILURE_RESPONSES)
async def get_detailed_city(city_name: str, provider: ProviderId = ProviderId.GEMINI) -> Any:
    """Return a city with its famous spots, images and live air quality."""

    bundle = get_planner_bundle()
    bundle.notifier.start()
    city = await bundle.planner.get_detailed_city(city_name, provider)
    return _respond(city, provider, bundle)


@app.post("/itinerary", response_model=Itinerary, responses=FAILURE_RESPONSES)
async def generate_itinerary(payload: ItineraryRequest) -> Any:
    """Generate a timed, day-by-day itinerary.

    Example JSON payload:
        ```json
        {
            "city": "Jaipur",
            "days": 3,
            "mustVisitSpots": ["Hawa Mahal", "Amber Fort"],
            "startDate": "2025-06-01",
            "provider": "gemini"
        }
        ```
    """

    logger.info("Itinerary request: %s, %s days from %s", payload.city, payload.days, payload.start_date)
    bundle = get_planner_bundle()
    bundle.notifier.start()
    itinerary = await bundle.planner.generate_itinerary(
        payload.city,
        payload.days,
        payload.must_visit_spots,
        payload.start_date,
        payload.provider,
    )
    return _respond(itinerary, payload.provider, bundle)


@app.get("/guides", response_model=List[Guide], responses=FAILURE_RESPONSES)
async def generate_guides(city: str = Query(..., min_length=1), provider: ProviderId = ProviderId.GEMINI) -> Any:
    bundle = get_planner_bundle()
    bundle.notifier.start()
    guides = await bundle.planner.generate_guides(city, provider)
    return _respond(guides, provider, bundle)


@app.post("/rides", response_model=RideRoute, responses=FAILURE_RESPONSES)
async def plan_ride(payload: RideRequest) -> Any:
    """Plan a road trip with periodic stops and live air quality per stop."""

    logger.info("Ride request: %s -> %s by %s", payload.origin, payload.destination, payload.vehicle_type)
    bundle = get_planner_bundle()
    bundle.notifier.start()
    route = await bundle.planner.plan_ride(
        payload.origin,
        payload.destination,
        payload.vehicle_type,
        payload.stop_interval_km,
        payload.provider,
    )
    return _respond(route, payload.provider, bundle)
