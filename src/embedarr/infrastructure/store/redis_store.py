"""Redis record store - async via redis.asyncio."""

from __future__ import annotations

import asyncio
import pickle
from typing import Any

import structlog
from redis.asyncio import Redis
from redis.exceptions import RedisError

from embedarr.domain.entities.errors import RecordStoreError

log = structlog.get_logger(__name__)


class RedisStore:
    """Async Redis store, values pickled (same contract as DiskcacheStore).

    Read/write failures are logged and raised as ``RecordStoreError``. A
    failed read must never look like a missing key: repositories rewrite
    whole lists, and treating an outage as "empty" would drop records.

    Args:
        url: Redis URL (e.g. ``redis://localhost:6379/0``).
        max_concurrent: Max parallel Redis ops.
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        max_concurrent: int = 50,
    ) -> None:
        self.url = url
        self.max_concurrent = max_concurrent
        self._client: Redis | None = None
        self._semaphore = asyncio.Semaphore(max_concurrent)

    def _require_open(self) -> Redis:
        if self._client is None:
            raise RuntimeError("Redis store not opened. Use 'async with store:'")
        return self._client

    async def __aenter__(self) -> RedisStore:
        if self._client is None:
            self._client = Redis.from_url(self.url, decode_responses=False)
            try:
                await self._client.ping()
            except RedisError as e:
                log.error("redis_connection_failed", url=self.url, error=str(e))
                raise
            log.info("redis_store_connected", url=self.url)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            log.info("redis_store_closed")

    async def get(self, key: str) -> Any | None:
        client = self._require_open()
        async with self._semaphore:
            try:
                raw = await client.get(key)
            except RedisError as e:
                log.error("redis_get_error", key=key, error=str(e))
                raise RecordStoreError(f"reading {key!r} failed: {e}") from e
        if raw is None:
            log.debug("store_get", key=key, hit=False)
            return None
        try:
            value = pickle.loads(raw)
        except (pickle.PickleError, EOFError, ValueError) as e:
            log.error("redis_unpickle_error", key=key, error=str(e))
            raise RecordStoreError(f"value under {key!r} is corrupt") from e
        log.debug("store_get", key=key, hit=True)
        return value

    async def set(self, key: str, value: Any, *, ttl: int | None = None) -> None:
        client = self._require_open()
        packed = pickle.dumps(value)
        async with self._semaphore:
            try:
                if ttl is None:
                    await client.set(key, packed)
                else:
                    await client.setex(key, ttl, packed)
            except RedisError as e:
                log.error("redis_set_error", key=key, error=str(e))
                raise RecordStoreError(f"writing {key!r} failed: {e}") from e
        log.debug("store_set", key=key, ttl=ttl, size_bytes=len(packed))

    async def delete(self, key: str) -> bool:
        client = self._require_open()
        async with self._semaphore:
            try:
                deleted = await client.delete(key)
            except RedisError as e:
                log.error("redis_delete_error", key=key, error=str(e))
                raise RecordStoreError(f"deleting {key!r} failed: {e}") from e
        return deleted > 0

    async def exists(self, key: str) -> bool:
        client = self._require_open()
        async with self._semaphore:
            try:
                return await client.exists(key) > 0
            except RedisError as e:
                log.error("redis_exists_error", key=key, error=str(e))
                raise RecordStoreError(f"checking {key!r} failed: {e}") from e

    async def clear(self) -> None:
        client = self._require_open()
        async with self._semaphore:
            try:
                await client.flushdb()
            except RedisError as e:
                log.error("redis_flush_error", error=str(e))
                raise RecordStoreError(f"flushing store failed: {e}") from e
        log.warning("store_cleared", url=self.url)
