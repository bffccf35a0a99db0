from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from embedarr.application.use_cases import (
    ChangelogUseCase,
    PlaybackUseCase,
    ServerAdminUseCase,
    WishlistUseCase,
)
from embedarr.infrastructure.persistence import (
    StoreChangelogRepository,
    StoreServerRepository,
    StoreWishlistRepository,
)
from embedarr.infrastructure.store import create_store
from embedarr.infrastructure.tmdb import HttpxTmdbClient
from embedarr.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. Record store (required by repositories and the TMDB cache)
        2. HTTP client (TMDB)
        3. Repositories (use store)
        4. TMDB client (only with an API key)
        5. Use cases (playback maps catalog ids through TMDB)
    """
    state = cast(AppState, app.state)
    config = state.config

    # ========== 1) Record store ==========
    store = create_store(config.store)
    await store.__aenter__()
    state.store = store
    log.info("store_initialized", backend=config.store.backend)

    # ========== 2) HTTP client ==========
    state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
    )
    log.info("http_client_initialized")

    # ========== 3) Repositories ==========
    state.server_repo = StoreServerRepository(store)
    state.changelog_repo = StoreChangelogRepository(store)
    state.wishlist_repo = StoreWishlistRepository(store)

    # ========== 4) TMDB client (optional) ==========
    if config.tmdb.api_key:
        state.tmdb_client = HttpxTmdbClient(
            api_key=config.tmdb.api_key,
            http_client=state.http_client,
            store=store,
            language=config.tmdb.language,
        )
        log.info("tmdb_client_initialized", language=config.tmdb.language)
    else:
        state.tmdb_client = None
        log.warning("tmdb_disabled", reason="no api key configured")

    # ========== 5) Use cases ==========
    state.server_admin_uc = ServerAdminUseCase(state.server_repo)
    state.playback_uc = PlaybackUseCase(
        state.server_admin_uc, metadata=state.tmdb_client
    )
    state.changelog_uc = ChangelogUseCase(state.changelog_repo)
    state.wishlist_uc = WishlistUseCase(state.wishlist_repo)
    log.info("use_cases_initialized")

    log.info("app_startup_complete", admins=len(config.admin.emails))

    try:
        yield
    finally:
        # ========== Cleanup (reverse order) ==========
        await state.http_client.aclose()
        log.info("http_client_closed")

        await state.store.aclose()
        log.info("store_closed")

        log.info("app_shutdown_complete")
