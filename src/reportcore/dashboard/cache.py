"""Widget cache stores.

Keys are built by the caller and always include the tenant and dashboard ids. Stores are
last-writer-wins; expiry is handled by the store, freshness by the caller.
"""

import asyncio
import json
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from reportcore.clock import Clock, SystemClock
from reportcore.domain.models.dashboard import CachedWidget


_transient = retry(
    retry=retry_if_exception_type((RedisConnectionError, RedisTimeoutError)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.1, max=1),
    reraise=True,
)


def widget_cache_key(namespace: str, tenant_id: str, dashboard_id: str, widget_id: str) -> str:
    return f"{namespace}:{tenant_id}:dashboard:{dashboard_id}:widget:{widget_id}"


class WidgetCacheStore(ABC):
    @abstractmethod
    async def get(self, key: str) -> Optional[CachedWidget]:
        """Return the cached entry, or None when absent or expired."""

    @abstractmethod
    async def set(self, key: str, entry: CachedWidget, ttl: int) -> None:
        """Store `entry` for `ttl` seconds."""

    @abstractmethod
    async def delete(self, key: str) -> None: ...


class InMemoryWidgetCache(WidgetCacheStore):
    """Process-local store for development and tests. Not shared across workers."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or SystemClock()
        self._entries: dict[str, tuple[CachedWidget, datetime]] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Optional[CachedWidget]:
        async with self._lock:
            if key not in self._entries:
                return None
            entry, expires_at = self._entries[key]
            if expires_at <= self._clock.now():
                del self._entries[key]
                return None
            return entry

    async def set(self, key: str, entry: CachedWidget, ttl: int) -> None:
        async with self._lock:
            self._entries[key] = (entry, self._clock.now() + timedelta(seconds=ttl))

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._entries.pop(key, None)


class RedisWidgetCache(WidgetCacheStore):
    """Redis-backed store; entries are JSON with a native Redis expiry."""

    def __init__(self, redis_url: str) -> None:
        self._client = redis.from_url(redis_url, decode_responses=True)

    @_transient
    async def get(self, key: str) -> Optional[CachedWidget]:
        raw = await self._client.get(key)
        if raw is None:
            return None
        return CachedWidget.model_validate(json.loads(raw))

    @_transient
    async def set(self, key: str, entry: CachedWidget, ttl: int) -> None:
        await self._client.set(key, entry.model_dump_json(), ex=ttl)

    async def delete(self, key: str) -> None:
        await self._client.delete(key)

    async def close(self) -> None:
        await self._client.aclose()
