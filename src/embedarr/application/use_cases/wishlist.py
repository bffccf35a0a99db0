"""Wishlist use case (per signed-in user)."""

from __future__ import annotations

import structlog

from embedarr.domain.entities import (
    WishlistItem,
    WishlistItemExists,
    WishlistItemNotFound,
)
from embedarr.domain.ports import WishlistRepository

log = structlog.get_logger(__name__)


class WishlistUseCase:
    def __init__(self, repo: WishlistRepository) -> None:
        self.repo = repo

    async def list_items(self, user: str) -> list[WishlistItem]:
        return await self.repo.list_for(user)

    async def add(self, user: str, item: WishlistItem) -> WishlistItem:
        saved = await self.repo.add(user, item)
        if saved is None:
            raise WishlistItemExists(item.content_id)
        log.info("wishlist_item_added", content_id=item.content_id)
        return saved

    async def remove(self, user: str, content_id: str) -> None:
        if not await self.repo.remove(user, content_id):
            raise WishlistItemNotFound(content_id)
        log.info("wishlist_item_removed", content_id=content_id)
