"""Image lookup with a search backend, an encyclopedia fallback and placeholders."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote, quote_plus

import httpx

from travel_ai.core.errors import EnrichmentLookupError

logger = logging.getLogger(__name__)

GOOGLE_API_URL = "https://www.googleapis.com/customsearch/v1"
WIKI_API_URL = "https://en.wikipedia.org/w/api.php"
PLACEHOLDER_URL = "https://placehold.co/600x400/1e293b/cbd5e1"
AVATAR_URL = "https://ui-avatars.com/api/"


def placeholder_image(query: str) -> str:
    """Deterministic placeholder image that echoes ``query``."""

    return f"{PLACEHOLDER_URL}?text={quote(query, safe='')}"


def avatar_image(name: str) -> str:
    """Generated avatar for a person; no network call involved."""

    return f"{AVATAR_URL}?name={quote_plus(name)}&background=random&size=256"


class ImageFinder:
    """Find one representative image URL per query string.

    Successful lookups are memoised for the lifetime of the finder so sibling
    entities sharing a name do not trigger duplicate requests. Placeholders are
    never memoised.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        google_api_key: Optional[str] = None,
        google_cx: Optional[str] = None,
    ) -> None:
        self._client = client
        self.google_api_key = google_api_key
        self.google_cx = google_cx
        self._memo: Dict[str, str] = {}

    @property
    def google_enabled(self) -> bool:
        return bool(self.google_api_key and self.google_cx)

    async def _get_json(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise EnrichmentLookupError(f"Image request to {url} failed: {exc}") from exc
        if not isinstance(data, dict):
            raise EnrichmentLookupError(f"Unexpected image payload from {url}")
        return data

    async def search_google(self, query: str) -> Optional[str]:
        """Return the first Google Custom Search image link for ``query``."""

        data = await self._get_json(
            GOOGLE_API_URL,
            {
                "key": self.google_api_key,
                "cx": self.google_cx,
                "q": query,
                "searchType": "image",
                "num": 1,
                "imgSize": "large",
                "safe": "active",
            },
        )
        items = data.get("items") or []
        first = items[0] if items else None
        return first.get("link") if isinstance(first, dict) else None

    async def search_wikipedia(self, query: str) -> Optional[str]:
        """Return the lead image thumbnail of the best-matching Wikipedia page."""

        search = await self._get_json(
            WIKI_API_URL,
            {
                "action": "query",
                "list": "search",
                "srsearch": query,
                "format": "json",
                "origin": "*",
                "srlimit": 1,
            },
        )
        hits = (search.get("query") or {}).get("search") or []
        if not hits or not isinstance(hits[0], dict):
            return None
        title = hits[0].get("title")
        if not title:
            return None

        images = await self._get_json(
            WIKI_API_URL,
            {
                "action": "query",
                "titles": title,
                "prop": "pageimages",
                "format": "json",
                "pithumbsize": 1000,
                "origin": "*",
            },
        )
        pages = (images.get("query") or {}).get("pages") or {}
        for page in pages.values():
            if not isinstance(page, dict):
                continue
            source = (page.get("thumbnail") or {}).get("source")
            if source:
                return source
        return None

    async def find(self, query: str) -> str:
        """Return an image URL for ``query``; falls back to a placeholder."""

        if query in self._memo:
            return self._memo[query]

        image_url: Optional[str] = None
        if self.google_enabled:
            try:
                image_url = await self.search_google(query)
            except EnrichmentLookupError as exc:
                logger.warning("Google image search failed for %r: %s", query, exc)

        if not image_url:
            try:
                image_url = await self.search_wikipedia(query)
            except EnrichmentLookupError as exc:
                logger.warning("Wikipedia image search failed for %r: %s", query, exc)

        if image_url:
            self._memo[query] = image_url
            return image_url

        logger.debug("Using placeholder image for %r", query)
        return placeholder_image(query)
