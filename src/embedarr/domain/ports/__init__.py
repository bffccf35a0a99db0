from .metadata import MetadataClientPort
from .repositories import ChangelogRepository, ServerRepository, WishlistRepository
from .store import RecordStorePort

__all__ = [
    "ChangelogRepository",
    "MetadataClientPort",
    "RecordStorePort",
    "ServerRepository",
    "WishlistRepository",
]
