"""Image lookup for destinations, spots and guides.

Public API:
    - ImageFinder: Search backend first, Wikipedia thumbnail second
    - placeholder_image: Deterministic placeholder echoing the query
    - avatar_image: Generated avatar URL for a person's name
"""
from travel_ai.services.images.client import (
    GOOGLE_API_URL,
    WIKI_API_URL,
    ImageFinder,
    avatar_image,
    placeholder_image,
)

__all__ = [
    "GOOGLE_API_URL",
    "WIKI_API_URL",
    "ImageFinder",
    "avatar_image",
    "placeholder_image",
]
