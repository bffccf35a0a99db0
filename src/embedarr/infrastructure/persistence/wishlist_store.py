"""Per-user wishlist repository backed by RecordStorePort."""

from __future__ import annotations

import asyncio
import json
from dataclasses import replace
from datetime import datetime, timezone

import structlog

from embedarr.domain.entities.catalog import WishlistItem
from embedarr.domain.entities.errors import RecordStoreError
from embedarr.domain.ports.store import RecordStorePort

log = structlog.get_logger(__name__)


def _wishlist_key(user: str) -> str:
    return f"wishlist:{user.strip().lower()}"


def _serialize_item(item: WishlistItem) -> dict:
    return {
        "content_id": item.content_id,
        "content_type": item.content_type,
        "title": item.title,
        "poster": item.poster,
        "added_at": item.added_at.isoformat() if item.added_at else None,
    }


def _deserialize_item(d: dict) -> WishlistItem:
    added_at = d.get("added_at")
    return WishlistItem(
        content_id=d["content_id"],
        content_type=d["content_type"],
        title=d["title"],
        poster=d.get("poster", ""),
        added_at=datetime.fromisoformat(added_at) if added_at else None,
    )


class StoreWishlistRepository:
    """One JSON list per user under ``wishlist:<email>``, newest first."""

    def __init__(self, store: RecordStorePort) -> None:
        self.store = store
        self._lock = asyncio.Lock()

    async def _load(self, user: str, *, for_write: bool = False) -> list[WishlistItem]:
        key = _wishlist_key(user)
        data = await self.store.get(key)
        if data is None:
            return []
        try:
            return [_deserialize_item(d) for d in json.loads(data)]
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            log.error("wishlist_deserialize_error", key=key, error=str(e))
            if for_write:
                raise RecordStoreError(f"corrupt data under {key!r}") from e
            return []

    async def list_for(self, user: str) -> list[WishlistItem]:
        return await self._load(user)

    async def _save(self, user: str, items: list[WishlistItem]) -> None:
        await self.store.set(
            _wishlist_key(user), json.dumps([_serialize_item(i) for i in items])
        )

    async def add(self, user: str, item: WishlistItem) -> WishlistItem | None:
        async with self._lock:
            items = await self._load(user, for_write=True)
            if any(i.content_id == item.content_id for i in items):
                return None
            saved = replace(item, added_at=datetime.now(timezone.utc))
            items.insert(0, saved)
            await self._save(user, items)
        log.debug("wishlist_item_saved", content_id=saved.content_id)
        return saved

    async def remove(self, user: str, content_id: str) -> bool:
        async with self._lock:
            items = await self._load(user, for_write=True)
            remaining = [i for i in items if i.content_id != content_id]
            if len(remaining) == len(items):
                return False
            await self._save(user, remaining)
        log.debug("wishlist_item_removed", content_id=content_id)
        return True
