"""Diskcache record store - SQLite-backed, no daemon process."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional

import structlog
from diskcache import Cache as DiskCache

log = structlog.get_logger(__name__)


class DiskcacheStore:
    """Async wrapper around diskcache.Cache (a sync-only library).

    - Disk I/O runs in ``asyncio.to_thread`` so the event loop never blocks.
    - A semaphore caps parallel operations (SQLite lock contention).
    - Keys written without a TTL never expire.

    Args:
        directory: Directory holding the SQLite files.
        max_concurrent: Max parallel disk ops.
    """

    def __init__(
        self,
        directory: str | Path = "./data/embedarr",
        max_concurrent: int = 10,
    ) -> None:
        self.directory = Path(directory)
        self._cache: DiskCache | None = None
        self._semaphore = asyncio.Semaphore(max_concurrent)

    def _require_open(self) -> DiskCache:
        if self._cache is None:
            raise RuntimeError(
                "Store not opened. Use 'async with store:' or await store.__aenter__()"
            )
        return self._cache

    async def __aenter__(self) -> DiskcacheStore:
        if self._cache is None:
            self._cache = await asyncio.to_thread(DiskCache, str(self.directory))
            log.info("diskcache_store_opened", directory=str(self.directory))
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._cache is not None:
            await asyncio.to_thread(self._cache.close)
            self._cache = None
            log.info("diskcache_store_closed", directory=str(self.directory))

    async def get(self, key: str) -> Optional[Any]:
        cache = self._require_open()
        async with self._semaphore:
            value = await asyncio.to_thread(cache.get, key, default=None)
        log.debug("store_get", key=key, hit=value is not None)
        return value

    async def set(self, key: str, value: Any, *, ttl: int | None = None) -> None:
        cache = self._require_open()
        async with self._semaphore:
            # expire=None keeps the key forever
            await asyncio.to_thread(cache.set, key, value, expire=ttl)
        log.debug("store_set", key=key, ttl=ttl)

    async def delete(self, key: str) -> bool:
        cache = self._require_open()
        async with self._semaphore:
            deleted = await asyncio.to_thread(cache.delete, key)
        log.debug("store_delete", key=key, deleted=deleted)
        return bool(deleted)

    async def exists(self, key: str) -> bool:
        cache = self._require_open()
        async with self._semaphore:
            # __contains__ honours expiry
            return await asyncio.to_thread(cache.__contains__, key)

    async def clear(self) -> None:
        cache = self._require_open()
        async with self._semaphore:
            await asyncio.to_thread(cache.clear)
        log.warning("store_cleared", directory=str(self.directory))
