"""Tests for the record store adapters and factory."""

from __future__ import annotations

import pickle
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from embedarr.domain.entities import RecordStoreError
from embedarr.infrastructure.config import StoreConfig
from embedarr.infrastructure.store import DiskcacheStore, RedisStore, create_store

# ---------------------------------------------------------------------------
# DiskcacheStore
# ---------------------------------------------------------------------------


class TestDiskcacheStore:
    async def test_unopened_store_raises(self, tmp_path: Path) -> None:
        store = DiskcacheStore(directory=tmp_path)
        with pytest.raises(RuntimeError):
            await store.get("k")

    async def test_set_without_ttl_persists(self, tmp_path: Path) -> None:
        async with DiskcacheStore(directory=tmp_path / "db") as store:
            await store.set("servers:custom", "[]")
            assert await store.get("servers:custom") == "[]"
            assert await store.exists("servers:custom")

    async def test_reopen_keeps_data(self, tmp_path: Path) -> None:
        async with DiskcacheStore(directory=tmp_path) as store:
            await store.set("k", {"a": 1})
        async with DiskcacheStore(directory=tmp_path) as store:
            assert await store.get("k") == {"a": 1}

    async def test_missing_key(self, tmp_path: Path) -> None:
        async with DiskcacheStore(directory=tmp_path) as store:
            assert await store.get("nope") is None
            assert await store.exists("nope") is False
            assert await store.delete("nope") is False

    async def test_delete_and_clear(self, tmp_path: Path) -> None:
        async with DiskcacheStore(directory=tmp_path) as store:
            await store.set("a", 1)
            await store.set("b", 2, ttl=60)
            assert await store.delete("a") is True
            await store.clear()
            assert await store.get("b") is None


# ---------------------------------------------------------------------------
# RedisStore (client mocked)
# ---------------------------------------------------------------------------


@pytest.fixture()
def redis_client() -> AsyncMock:
    client = AsyncMock()
    client.get = AsyncMock(return_value=None)
    client.delete = AsyncMock(return_value=1)
    client.exists = AsyncMock(return_value=0)
    return client


@pytest.fixture()
def redis_store(redis_client: AsyncMock) -> RedisStore:
    store = RedisStore(url="redis://localhost:6379/9")
    store._client = redis_client
    return store


class TestRedisStore:
    async def test_unopened_store_raises(self) -> None:
        with pytest.raises(RuntimeError):
            await RedisStore().get("k")

    async def test_set_without_ttl_uses_plain_set(
        self, redis_store: RedisStore, redis_client: AsyncMock
    ) -> None:
        await redis_store.set("k", [1, 2])
        redis_client.set.assert_awaited_once_with("k", pickle.dumps([1, 2]))
        redis_client.setex.assert_not_awaited()

    async def test_set_with_ttl_uses_setex(
        self, redis_store: RedisStore, redis_client: AsyncMock
    ) -> None:
        await redis_store.set("k", "v", ttl=30)
        redis_client.setex.assert_awaited_once_with("k", 30, pickle.dumps("v"))

    async def test_get_unpickles(
        self, redis_store: RedisStore, redis_client: AsyncMock
    ) -> None:
        redis_client.get.return_value = pickle.dumps({"x": 1})
        assert await redis_store.get("k") == {"x": 1}

    async def test_get_error_is_not_a_miss(
        self, redis_store: RedisStore, redis_client: AsyncMock
    ) -> None:
        redis_client.get.side_effect = RedisConnectionError("down")
        with pytest.raises(RecordStoreError, match="reading 'k' failed"):
            await redis_store.get("k")

    async def test_corrupt_value_raises(
        self, redis_store: RedisStore, redis_client: AsyncMock
    ) -> None:
        redis_client.get.return_value = b"not a pickle"
        with pytest.raises(RecordStoreError):
            await redis_store.get("k")

    async def test_set_error_raises(
        self, redis_store: RedisStore, redis_client: AsyncMock
    ) -> None:
        redis_client.set.side_effect = RedisConnectionError("down")
        with pytest.raises(RecordStoreError):
            await redis_store.set("k", "v")

    async def test_delete_error_raises(
        self, redis_store: RedisStore, redis_client: AsyncMock
    ) -> None:
        redis_client.delete.side_effect = RedisConnectionError("down")
        with pytest.raises(RecordStoreError):
            await redis_store.delete("k")

    async def test_delete_and_exists(
        self, redis_store: RedisStore, redis_client: AsyncMock
    ) -> None:
        assert await redis_store.delete("k") is True
        assert await redis_store.exists("k") is False

    async def test_aclose_drops_client(
        self, redis_store: RedisStore, redis_client: AsyncMock
    ) -> None:
        await redis_store.aclose()
        redis_client.aclose.assert_awaited_once()
        with pytest.raises(RuntimeError):
            await redis_store.get("k")


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


class TestCreateStore:
    def test_diskcache(self, tmp_path: Path) -> None:
        store = create_store(StoreConfig(backend="diskcache", dir=str(tmp_path)))
        assert isinstance(store, DiskcacheStore)
        assert store.directory == tmp_path

    def test_redis(self) -> None:
        store = create_store(
            StoreConfig(
                backend="redis", redis_url="redis://cache:6379/1", max_concurrent=7
            )
        )
        assert isinstance(store, RedisStore)
        assert store.url == "redis://cache:6379/1"
        assert store.max_concurrent == 7

    def test_unknown_backend(self) -> None:
        config = StoreConfig.model_construct(backend="memcached")
        with pytest.raises(ValueError, match="Unknown store backend"):
            create_store(config)
