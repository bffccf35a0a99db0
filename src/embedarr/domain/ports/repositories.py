"""Ports for persisted records (servers, changelog, wishlists)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from embedarr.domain.entities.catalog import ChangelogEntry, WishlistItem
from embedarr.domain.entities.servers import ServerDefinition


@runtime_checkable
class ServerRepository(Protocol):
    """Admin-managed streaming servers, oldest first."""

    async def list_all(self) -> list[ServerDefinition]: ...

    async def get(self, server_id: str) -> ServerDefinition | None: ...

    async def add(self, server: ServerDefinition) -> ServerDefinition:
        """Persist a draft; returns it with ``id`` and ``created_at`` set."""
        ...

    async def update(self, server: ServerDefinition) -> ServerDefinition | None:
        """Replace the record with ``server.id``. None if it does not exist."""
        ...

    async def delete(self, server_id: str) -> bool: ...


@runtime_checkable
class ChangelogRepository(Protocol):
    """Published changelog entries, newest first."""

    async def list_all(self) -> list[ChangelogEntry]: ...

    async def add(self, entry: ChangelogEntry) -> ChangelogEntry: ...


@runtime_checkable
class WishlistRepository(Protocol):
    """Per-user wishlists, newest first, unique by content id."""

    async def list_for(self, user: str) -> list[WishlistItem]: ...

    async def add(self, user: str, item: WishlistItem) -> WishlistItem | None:
        """Store an item. None if the user already saved that content id."""
        ...

    async def remove(self, user: str, content_id: str) -> bool: ...
