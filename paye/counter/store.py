from __future__ import annotations

import asyncio
import logging
import math
from typing import Any, Protocol, runtime_checkable

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from paye.config import Settings

logger = logging.getLogger("paye.counter")

_FAILURES = (RedisError, OSError, asyncio.TimeoutError)


@runtime_checkable
class CounterStore(Protocol):
    """Best-effort visit counter. Implementations never raise to the caller."""

    backend: str

    async def connect(self) -> None: ...

    async def close(self) -> None: ...

    async def get_count(self) -> int: ...

    async def save_count(self, count: int) -> None: ...

    async def increment_count(self) -> int: ...


def _coerce_count(count: Any) -> int:
    if isinstance(count, bool):
        return 0
    if isinstance(count, int):
        return max(count, 0)
    if isinstance(count, float) and math.isfinite(count):
        return max(int(count), 0)
    return 0


class NullCounterStore:
    backend = "null"

    async def connect(self) -> None:
        logger.info("Visit counter disabled; counts will not persist")

    async def close(self) -> None:
        return None

    async def get_count(self) -> int:
        logger.debug("Counter store unavailable, returning 0")
        return 0

    async def save_count(self, count: int) -> None:
        logger.warning("Counter store unavailable, cannot save count %s", count)

    async def increment_count(self) -> int:
        logger.warning("Counter store unavailable, returning default count")
        return 1


class RedisCounterStore:
    backend = "redis"

    def __init__(
        self,
        client: Any,
        key: str,
        *,
        increment_timeout: float = 1.0,
        connect_timeout: float = 3.0,
    ) -> None:
        self.client = client
        self.key = key
        self.increment_timeout = increment_timeout
        self.connect_timeout = connect_timeout
        self.connected = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "RedisCounterStore":
        if not settings.redis_url:
            raise ValueError("REDIS_URL is required for the redis counter backend")
        client = aioredis.from_url(
            settings.redis_url,
            socket_connect_timeout=settings.counter_connect_timeout,
            socket_timeout=settings.counter_command_timeout,
            decode_responses=True,
        )
        return cls(
            client,
            settings.counter_key,
            increment_timeout=settings.counter_increment_timeout,
            connect_timeout=settings.counter_connect_timeout,
        )

    async def connect(self) -> None:
        try:
            await asyncio.wait_for(self.client.ping(), timeout=self.connect_timeout)
        except _FAILURES as exc:
            self.connected = False
            logger.error("Redis connection error: %s", exc)
            return
        self.connected = True
        logger.info("Redis connected successfully")

    async def close(self) -> None:
        try:
            await self.client.aclose()
        except _FAILURES as exc:
            logger.warning("Failed to close Redis client: %s", exc)
        self.connected = False

    async def get_count(self) -> int:
        try:
            raw = await self.client.get(self.key)
        except _FAILURES as exc:
            logger.error("Error reading visit count from Redis: %s", exc)
            return 0
        if raw is None:
            logger.info("Key %s does not exist yet, starting from 0", self.key)
            return 0
        try:
            count = int(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring non-numeric visit count %r under %s", raw, self.key)
            return 0
        logger.debug("Read visit count %s from Redis", count)
        return count

    async def save_count(self, count: int) -> None:
        value = _coerce_count(count)
        try:
            # No expiry: the count persists until overwritten.
            await self.client.set(self.key, str(value))
        except _FAILURES as exc:
            logger.error("Error saving visit count to Redis: %s", exc)
            return
        logger.info("Saved visit count %s to Redis", value)

    async def increment_count(self) -> int:
        try:
            count = await asyncio.wait_for(self.client.incr(self.key), timeout=self.increment_timeout)
        except asyncio.TimeoutError:
            logger.warning("Redis INCR timed out after %.1fs", self.increment_timeout)
            return 1
        except _FAILURES as exc:
            logger.error("Error incrementing visit count in Redis: %s", exc)
            return 1
        logger.info("Incremented visit count in Redis to %s", count)
        return int(count)


def build_counter_store(settings: Settings) -> CounterStore:
    backend = settings.resolved_counter_backend()
    if settings.counter_backend == "redis" and backend == "null":
        logger.warning("COUNTER_BACKEND=redis but REDIS_URL is not configured; visit count will not persist")
    if backend == "null":
        return NullCounterStore()
    try:
        return RedisCounterStore.from_settings(settings)
    except ValueError as exc:
        logger.error("Failed to create Redis client: %s", exc)
        return NullCounterStore()


__all__ = [
    "CounterStore",
    "NullCounterStore",
    "RedisCounterStore",
    "build_counter_store",
]
