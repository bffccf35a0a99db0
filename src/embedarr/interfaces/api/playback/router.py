"""Playback endpoints: embed URLs per server for a movie or episode."""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from embedarr.application.use_cases import PlaybackSources, UnavailableServer
from embedarr.domain.entities import (
    Err,
    MediaKind,
    PlaybackRequest,
    ResolvedUrl,
    ServerNotFound,
)
from embedarr.interfaces.api.presenter import format_error
from embedarr.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/play", tags=["playback"])


def _format_source(resolved: ResolvedUrl) -> dict[str, Any]:
    return {
        "server_id": resolved.server_id,
        "server_name": resolved.server_name,
        "url": resolved.url,
    }


def _format_unavailable(entry: UnavailableServer) -> dict[str, Any]:
    return {
        "server_id": entry.server.id,
        "server_name": entry.server.name,
        "error": format_error(entry.error),
    }


def _format_sources(result: PlaybackSources) -> dict[str, Any]:
    req = result.request
    return {
        "content_id": req.content_id,
        "media_kind": req.media_kind,
        "season": req.season,
        "episode": req.episode,
        "sources": [_format_source(r) for r in result.sources],
        "unavailable": [_format_unavailable(u) for u in result.unavailable],
    }


async def _play(state: AppState, playback: PlaybackRequest) -> JSONResponse:
    result = await state.playback_uc.sources(playback)
    error = result.request_error
    if error is not None:
        # Nothing resolved and every server failed the same way
        return JSONResponse(content={"error": format_error(error)}, status_code=422)
    return JSONResponse(content=_format_sources(result))


@router.get("/movie/{content_id}")
async def play_movie(content_id: str, request: Request) -> JSONResponse:
    state = cast(AppState, request.app.state)
    return await _play(state, PlaybackRequest(content_id=content_id, media_kind="movie"))


@router.get("/series/{content_id}")
async def play_episode(
    content_id: str,
    request: Request,
    season: int | None = None,
    episode: int | None = None,
) -> JSONResponse:
    state = cast(AppState, request.app.state)
    playback = PlaybackRequest(
        content_id=content_id,
        media_kind="series",
        season=season,
        episode=episode,
    )
    return await _play(state, playback)


@router.get("/{media_kind}/{content_id}/{server_id}")
async def play_on_server(
    media_kind: MediaKind,
    content_id: str,
    server_id: str,
    request: Request,
    season: int | None = None,
    episode: int | None = None,
) -> JSONResponse:
    """Resolve the embed URL on a single server."""
    state = cast(AppState, request.app.state)
    playback = PlaybackRequest(
        content_id=content_id,
        media_kind=media_kind,
        season=season,
        episode=episode,
    )
    try:
        result = await state.playback_uc.resolve_with(server_id, playback)
    except ServerNotFound as e:
        raise HTTPException(
            status_code=404, detail=f"Server not found: {server_id}"
        ) from e

    if isinstance(result, Err):
        log.info(
            "playback_rejected",
            server_id=server_id,
            content_id=content_id,
            error=result.error.kind,
        )
        return JSONResponse(
            content={"error": format_error(result.error)}, status_code=422
        )
    return JSONResponse(content=_format_source(result.value))
