"""Repositories persisting records through the record store."""

from .changelog_store import StoreChangelogRepository
from .server_store import StoreServerRepository
from .wishlist_store import StoreWishlistRepository

__all__ = [
    "StoreChangelogRepository",
    "StoreServerRepository",
    "StoreWishlistRepository",
]
