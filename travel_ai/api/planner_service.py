from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

import httpx

from travel_ai.core.cache import CacheStore, InMemoryCacheStore, JsonFileCacheStore
from travel_ai.core.config import ApiSettings, load_key_overrides
from travel_ai.core.enrichment import Enricher
from travel_ai.core.fetcher import StructuredFetcher
from travel_ai.core.notifications import BannerNotifier
from travel_ai.core.planner import TravelPlanner
from travel_ai.core.types import ProviderId
from travel_ai.services.air_quality import AirQualityService
from travel_ai.services.images import ImageFinder
from travel_ai.services.providers import ProviderAdapter, build_adapters

logger = logging.getLogger(__name__)

USER_AGENT = "TravelAI/1.0"


def _build_cache(settings: ApiSettings) -> CacheStore:
    if settings.cache_dir:
        return JsonFileCacheStore(settings.cache_dir)
    logger.info("TRAVEL_AI_CACHE_DIR not set; caching responses in memory only")
    return InMemoryCacheStore()


class PlannerBundle:
    """Container for the planner and everything it depends on.

    The bundle owns the shared HTTP client used for image, geocoding and
    air-quality lookups, the provider adapters with their resolved
    credentials, the response cache and the per-request banner notifier.

    Attributes:
        settings: API configuration with external service credentials
        http_client: Shared async client for auxiliary lookups
        adapters: One LLM adapter per provider
        cache: Response cache keyed by provider and prompt
        notifier: Collects user-facing failure messages per request
        planner: Domain query functions consumed by the routes
    """

    def __init__(
        self,
        settings: ApiSettings,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        adapters: Optional[Mapping[ProviderId, ProviderAdapter]] = None,
        cache: Optional[CacheStore] = None,
    ) -> None:
        self.settings = settings
        self.http_client = http_client or httpx.AsyncClient(
            headers={"accept": "application/json", "User-Agent": USER_AGENT},
            timeout=httpx.Timeout(settings.http_timeout_s, connect=10.0),
        )
        overrides = load_key_overrides(settings.overrides_path)
        self.adapters: Dict[ProviderId, ProviderAdapter] = dict(
            adapters or build_adapters(settings, overrides)
        )
        self.cache = cache or _build_cache(settings)
        self.notifier = BannerNotifier()

        self.fetcher = StructuredFetcher(self.adapters, self.cache, notifier=self.notifier)
        self.enricher = Enricher(
            ImageFinder(
                self.http_client,
                google_api_key=settings.google_search_api_key,
                google_cx=settings.google_cx,
            ),
            AirQualityService(self.http_client),
        )
        self.planner = TravelPlanner(self.fetcher, self.enricher)

    def __repr__(self) -> str:
        adapters = ", ".join(f"{provider.value}={adapter!r}" for provider, adapter in self.adapters.items())
        return f"PlannerBundle(adapters={{{adapters}}}, cache={type(self.cache).__name__})"

    async def close(self) -> None:
        await self.http_client.aclose()
