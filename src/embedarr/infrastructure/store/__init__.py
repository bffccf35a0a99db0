"""Record store backends."""

from .diskcache_store import DiskcacheStore
from .redis_store import RedisStore
from .store_factory import create_store

__all__ = ["DiskcacheStore", "RedisStore", "create_store"]
