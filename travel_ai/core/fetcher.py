"""Prompt-to-structured-object orchestration with caching.

``StructuredFetcher.fetch_structured`` is the single entry point used by the
domain query functions. It checks the cache, calls the selected provider
adapter, strips/parses/validates the reply, writes it back to the cache and
returns the validated object. Every failure is converted into one user-facing
notification plus a ``None`` return value; no exception leaves this module.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, TypeVar, Union

from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from travel_ai.core.cache import CacheStore, Clock, is_expired, make_cache_key, now_ms
from travel_ai.core.errors import FetchError, MalformedResponseError, ProviderError, RateLimitError
from travel_ai.core.notifications import LogNotifier, Notifier
from travel_ai.core.parsing import parse_json_text, to_payload, type_adapter, validate_shape
from travel_ai.core.types import ProviderId
from travel_ai.services.providers.base import ProviderAdapter

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_ATTEMPTS = 3
# 2s, 4s, ... between rate-limited attempts
DEFAULT_RETRY_WAIT = wait_exponential(multiplier=2, min=2, max=30)


class StructuredFetcher:
    """Cache-aware structured fetch against interchangeable LLM providers."""

    def __init__(
        self,
        adapters: Mapping[ProviderId, ProviderAdapter],
        cache: CacheStore,
        *,
        notifier: Optional[Notifier] = None,
        clock: Clock = now_ms,
        retry_wait: wait_base = DEFAULT_RETRY_WAIT,
        max_attempts: int = MAX_ATTEMPTS,
    ) -> None:
        self.adapters = dict(adapters)
        self.cache = cache
        self.notifier = notifier or LogNotifier()
        self.clock = clock
        self.retry_wait = retry_wait
        self.max_attempts = max_attempts

    def _read_cache(self, key: str, shape: Any, provider: ProviderId) -> Optional[Any]:
        try:
            entry = self.cache.get(key)
        except Exception as exc:
            logger.warning("Cache read failed for %s: %s", key, exc)
            return None
        if entry is None:
            logger.debug("Cache miss for %s (%s)", key, provider.value)
            return None

        if is_expired(entry, self.clock()):
            logger.info("Cache expired for %s (%s)", key, provider.value)
            self._evict(key)
            return None

        try:
            value = type_adapter(shape).validate_python(entry.payload)
        except ValidationError as exc:
            logger.warning("Discarding cached payload for %s that no longer matches its shape: %s", key, exc)
            self._evict(key)
            return None

        logger.info("Serving from cache (%s): %s", provider.value, key)
        return value

    def _evict(self, key: str) -> None:
        try:
            self.cache.delete(key)
        except Exception as exc:
            logger.warning("Cache eviction failed for %s: %s", key, exc)

    def _write_cache(self, key: str, value: Any, shape: Any) -> None:
        try:
            self.cache.put(key, to_payload(value, shape))
        except Exception as exc:
            logger.warning("Cache write failed for %s: %s", key, exc)

    async def _complete(self, adapter: ProviderAdapter, prompt: str, shape: Any) -> str:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self.retry_wait,
            retry=retry_if_exception_type(RateLimitError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await adapter.complete(prompt, shape)
        raise ProviderError(adapter.provider, "Provider call was never attempted")

    async def fetch_structured(
        self,
        prompt: str,
        shape: Any,
        provider: Union[ProviderId, str] = ProviderId.GEMINI,
    ) -> Optional[T]:
        """Return the structured object for ``prompt`` or ``None`` on failure.

        Args:
            prompt: Exact prompt text; also part of the cache key.
            shape: Pydantic model or typing form (e.g. ``List[Country]``) the
                reply must conform to.
            provider: Backend that should answer the prompt.
        """

        try:
            provider = ProviderId(provider)
        except ValueError:
            message = f"Invalid provider: {provider}"
            logger.error(message)
            self.notifier.notify(message)
            return None

        key = make_cache_key(provider, prompt)
        cached = self._read_cache(key, shape, provider)
        if cached is not None:
            return cached

        raw_text: Optional[str] = None
        try:
            adapter = self.adapters.get(provider)
            if adapter is None:
                raise ProviderError(provider, "Provider is not configured")
            raw_text = await self._complete(adapter, prompt, shape)
            data = parse_json_text(raw_text, provider)
            result = validate_shape(data, shape, provider, raw_text)
        except MalformedResponseError as exc:
            logger.error("Malformed response from %s: %s | raw: %s", provider.value, exc, exc.snippet)
            self.notifier.notify(exc.user_message())
            return None
        except FetchError as exc:
            logger.error("Error fetching from %s: %s", provider.value, exc)
            self.notifier.notify(exc.user_message())
            return None
        except Exception as exc:
            logger.exception("Unexpected error fetching from %s", provider.value)
            self.notifier.notify(f"{provider.label} Error: {exc}")
            return None

        self._write_cache(key, result, shape)
        return result
