"""FastAPI application factory (create_app)."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.responses import Response

from embedarr import __version__
from embedarr.domain.entities import RecordStoreError
from embedarr.infrastructure.config import AppConfig
from embedarr.interfaces.app_state import AppState
from embedarr.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


def create_app(config: AppConfig) -> FastAPI:
    """Create FastAPI app - configuration ONLY, NO resource initialization.

    Resources (store, HTTP client, repositories) are created in lifespan().
    """
    app = FastAPI(
        title="Embedarr",
        description="Streaming-server catalog and embed URL resolver",
        version=__version__,
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    from embedarr.interfaces.api.catalog.router import router as catalog_router
    from embedarr.interfaces.api.changelog.router import router as changelog_router
    from embedarr.interfaces.api.playback.router import router as playback_router
    from embedarr.interfaces.api.servers.router import router as servers_router
    from embedarr.interfaces.api.wishlist.router import router as wishlist_router

    app.include_router(servers_router, prefix="/api/v1")
    app.include_router(playback_router, prefix="/api/v1")
    app.include_router(changelog_router, prefix="/api/v1")
    app.include_router(wishlist_router, prefix="/api/v1")
    app.include_router(catalog_router, prefix="/api/v1")

    @app.get("/api/v1/healthz")
    async def healthz() -> dict[str, str | int]:
        """Liveness check: 200 as long as the process is running."""
        server_admin = getattr(app.state, "server_admin_uc", None)
        servers = await server_admin.list_servers() if server_admin else []
        return {"status": "ok", "servers": len(servers)}

    @app.exception_handler(RecordStoreError)
    async def store_unavailable(request: Request, exc: RecordStoreError):
        log.error("store_unavailable", path=request.url.path, error=str(exc))
        return JSONResponse(
            {"error": {"kind": "store_unavailable", "message": str(exc)}},
            status_code=503,
        )

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ):
        start = time.perf_counter()
        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            status_code = getattr(locals().get("response", None), "status_code", 500)

            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                query=str(request.url.query),
                status_code=status_code,
                duration_ms=round(duration_ms, 2),
                client_host=(request.client.host if request.client else None),
            )

    return app
