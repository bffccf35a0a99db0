"""Store factory - picks the adapter for the configured backend."""

from __future__ import annotations

import structlog

from embedarr.domain.ports.store import RecordStorePort
from embedarr.infrastructure.config.schema import StoreConfig
from embedarr.infrastructure.store.diskcache_store import DiskcacheStore
from embedarr.infrastructure.store.redis_store import RedisStore

log = structlog.get_logger(__name__)


def create_store(config: StoreConfig) -> RecordStorePort:
    """Create an (unopened) store adapter.

    Raises:
        ValueError: if ``config.backend`` is unknown.
    """
    if config.backend == "diskcache":
        log.info(
            "store_factory_create",
            backend=config.backend,
            directory=str(config.directory),
            max_concurrent=config.max_concurrent,
        )
        return DiskcacheStore(
            directory=config.directory,
            max_concurrent=config.max_concurrent,
        )
    if config.backend == "redis":
        log.info(
            "store_factory_create",
            backend=config.backend,
            url=config.redis_url,
            max_concurrent=config.max_concurrent,
        )
        return RedisStore(
            url=config.redis_url,
            max_concurrent=config.max_concurrent,
        )
    raise ValueError(
        f"Unknown store backend: {config.backend!r}. Must be 'diskcache' or 'redis'."
    )
