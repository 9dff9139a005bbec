"""Air-quality lookups.

Public API:
    - AirQualityService: Geocode a place name and fetch its current US AQI
    - aqi_category: Map a numeric index to its severity label
    - format_aqi: Render the ``AQI <n> (<label>)`` display string
"""
from travel_ai.services.air_quality.client import (
    AQI_API_URL,
    AirQualityService,
    aqi_category,
    current_us_aqi,
    format_aqi,
)

__all__ = [
    "AQI_API_URL",
    "AirQualityService",
    "aqi_category",
    "current_us_aqi",
    "format_aqi",
]
