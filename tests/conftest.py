"""Pytest configuration for the travel planner project."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import pytest
from tenacity import wait_none

# Ensure the project root is on sys.path so that import travel_ai works under pytest.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from travel_ai.core.cache import InMemoryCacheStore  # noqa: E402
from travel_ai.core.config import ProviderCredentials  # noqa: E402
from travel_ai.core.fetcher import StructuredFetcher  # noqa: E402
from travel_ai.core.types import ProviderId  # noqa: E402
from travel_ai.services.providers.base import ProviderAdapter  # noqa: E402


class ScriptedAdapter(ProviderAdapter):
    """Adapter stub that replays canned replies (strings) or raises canned errors."""

    def __init__(self, provider: ProviderId, replies: Sequence[Union[str, BaseException]] = ()) -> None:
        super().__init__(ProviderCredentials(provider, "test-key", "test-model", "environment"))
        self.provider = provider
        self.replies: List[Union[str, BaseException]] = list(replies)
        self.calls: List[Dict[str, Any]] = []

    async def complete(self, prompt: str, shape: Any) -> str:
        self.calls.append({"prompt": prompt, "shape": shape})
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, BaseException):
            raise reply
        return reply


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages: List[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start_ms: int = 1_700_000_000_000) -> None:
        self.now = start_ms

    def __call__(self) -> int:
        return self.now

    def advance(self, *, hours: float = 0, ms: int = 0) -> None:
        self.now += int(hours * 3600 * 1000) + ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> InMemoryCacheStore:
    return InMemoryCacheStore(clock=clock)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def make_fetcher(cache, notifier, clock):
    """Build a fetcher around scripted adapters without retry delays."""

    def factory(
        adapters: Dict[ProviderId, ProviderAdapter],
        *,
        max_attempts: int = 3,
        cache_store: Optional[Any] = None,
    ) -> StructuredFetcher:
        return StructuredFetcher(
            adapters,
            cache_store if cache_store is not None else cache,
            notifier=notifier,
            clock=clock,
            retry_wait=wait_none(),
            max_attempts=max_attempts,
        )

    return factory
