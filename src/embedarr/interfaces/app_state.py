"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from embedarr.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from embedarr.application.use_cases import (
        ChangelogUseCase,
        PlaybackUseCase,
        ServerAdminUseCase,
        WishlistUseCase,
    )
    from embedarr.domain.ports import (
        ChangelogRepository,
        MetadataClientPort,
        RecordStorePort,
        ServerRepository,
        WishlistRepository,
    )


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    store: RecordStorePort
    http_client: httpx.AsyncClient

    # Repositories
    server_repo: ServerRepository
    changelog_repo: ChangelogRepository
    wishlist_repo: WishlistRepository

    # Use cases
    server_admin_uc: ServerAdminUseCase
    playback_uc: PlaybackUseCase
    changelog_uc: ChangelogUseCase
    wishlist_uc: WishlistUseCase

    # Catalog (optional, requires TMDB API key)
    tmdb_client: MetadataClientPort | None
