"""Geocoding and location resolution services.

This module converts place names to coordinates using the Open-Meteo
geocoding API.

Public API:
    - geocode: Resolve a place name to ``Coordinates``
"""
from travel_ai.services.geocoding.geocoding import GEOCODING_API_URL, geocode

__all__ = [
    "GEOCODING_API_URL",
    "geocode",
]
