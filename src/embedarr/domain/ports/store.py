"""Record Store Port - Interface for the backend-agnostic key-value store."""

from __future__ import annotations

from typing import Any, Protocol


class RecordStorePort(Protocol):
    """Port for an async key-value store.

    Implementations:
      - DiskcacheStore (SQLite-based, no daemon)
      - RedisStore (Redis async client)

    ``set`` without ``ttl`` stores the value until it is deleted; a TTL
    (seconds) makes the key expire, which the metadata response cache uses.

    Each adapter MUST support async context-manager semantics:
        async with store:
            await store.set("key", value)
    """

    async def get(self, key: str) -> Any:
        """Retrieve value. None = not found / expired."""
        ...

    async def set(self, key: str, value: Any, *, ttl: int | None = None) -> None:
        """Set value; persistent unless ``ttl`` is given."""
        ...

    async def delete(self, key: str) -> bool:
        """Delete key. True = deleted, False = did not exist."""
        ...

    async def exists(self, key: str) -> bool:
        ...

    async def clear(self) -> None:
        """Delete ALL keys."""
        ...

    async def aclose(self) -> None:
        ...

    async def __aenter__(self) -> RecordStorePort: ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None: ...
