"""Opportunistic response cache keyed by (provider, prompt).

Caching is an optimisation only: stores never raise to their callers. Read
failures are reported as misses and write failures are logged and dropped.
"""
from __future__ import annotations

import hashlib
import json
import logging
import os
import tempfile
import time
from datetime import timedelta
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Protocol

from pydantic import BaseModel, ValidationError

from travel_ai.core.errors import CacheIOError
from travel_ai.core.types import ProviderId

logger = logging.getLogger(__name__)

# Bump the version suffix whenever the cached data layout changes.
CACHE_PREFIX = "ai_cache_v3_"
CACHE_TTL = timedelta(hours=24)

Clock = Callable[[], int]


def now_ms() -> int:
    return int(time.time() * 1000)


def make_cache_key(provider: ProviderId, prompt: str) -> str:
    """Return the namespaced cache key for a provider/prompt pair."""

    digest = hashlib.blake2b(f"{provider.value}:{prompt}".encode("utf-8"), digest_size=8)
    return f"{CACHE_PREFIX}{digest.hexdigest()}"


class CacheEntry(BaseModel):
    """A whole cached record; never partially updated."""

    key: str
    timestamp: int
    payload: Any

    def to_record(self) -> Dict[str, Any]:
        return {"timestamp": self.timestamp, "data": self.payload}

    @classmethod
    def from_record(cls, key: str, record: Any) -> "CacheEntry":
        if not isinstance(record, dict) or "timestamp" not in record or "data" not in record:
            raise CacheIOError(f"Cache record {key} is missing timestamp/data")
        return cls(key=key, timestamp=record["timestamp"], payload=record["data"])


def is_expired(entry: CacheEntry, now: int, ttl: timedelta = CACHE_TTL) -> bool:
    return now - entry.timestamp >= ttl.total_seconds() * 1000


class CacheStore(Protocol):
    """Pluggable key-value capability used by the structured fetcher."""

    def get(self, key: str) -> Optional[CacheEntry]:
        ...

    def put(self, key: str, payload: Any) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class InMemoryCacheStore:
    """Process-local cache holding serialised records, mainly for tests."""

    def __init__(self, *, clock: Clock = now_ms) -> None:
        self._clock = clock
        self._records: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: str) -> bool:
        return key in self._records

    def get(self, key: str) -> Optional[CacheEntry]:
        raw = self._records.get(key)
        if raw is None:
            return None
        try:
            return CacheEntry.from_record(key, json.loads(raw))
        except (json.JSONDecodeError, ValidationError, CacheIOError) as exc:
            logger.warning("Cache read failed for %s: %s", key, exc)
            return None

    def put(self, key: str, payload: Any) -> None:
        entry = CacheEntry(key=key, timestamp=self._clock(), payload=payload)
        try:
            self._records[key] = json.dumps(entry.to_record())
        except (TypeError, ValueError) as exc:
            logger.warning("Cache write failed for %s: %s", key, exc)

    def delete(self, key: str) -> None:
        self._records.pop(key, None)


class JsonFileCacheStore:
    """Directory-backed cache storing one JSON record per key."""

    def __init__(self, directory: str | os.PathLike[str], *, clock: Clock = now_ms) -> None:
        self.directory = Path(directory)
        self._clock = clock

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[CacheEntry]:
        path = self._path(key)
        try:
            if not path.exists():
                return None
            record = json.loads(path.read_text(encoding="utf-8"))
            return CacheEntry.from_record(key, record)
        except (OSError, json.JSONDecodeError, ValidationError, CacheIOError) as exc:
            logger.warning("Cache read failed for %s: %s", key, exc)
            return None

    def put(self, key: str, payload: Any) -> None:
        entry = CacheEntry(key=key, timestamp=self._clock(), payload=payload)
        tmp_name: Optional[str] = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            # Write to a temp file first so readers never see a half-written record.
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(entry.to_record(), handle)
            os.replace(tmp_name, self._path(key))
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Cache write failed for %s: %s", key, exc)
            if tmp_name is not None:
                self._discard(tmp_name)

    def _discard(self, tmp_name: str) -> None:
        try:
            Path(tmp_name).unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove temporary cache file %s: %s", tmp_name, exc)

    def delete(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Cache eviction failed for %s: %s", key, exc)
