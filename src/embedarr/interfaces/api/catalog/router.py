"""Catalog endpoints (trending + search via TMDB)."""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import APIRouter, HTTPException, Path, Request
from fastapi.responses import JSONResponse

from embedarr.domain.entities import (
    CatalogItem,
    Episode,
    MediaKind,
    TitleDetails,
    Trailer,
)
from embedarr.domain.ports import MetadataClientPort
from embedarr.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/catalog", tags=["catalog"])


def _format_item(item: CatalogItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "type": item.type,
        "name": item.name,
        "poster": item.poster,
        "description": item.description,
        "releaseInfo": item.release_info,
        "rating": item.rating,
    }


def _format_details(details: TitleDetails) -> dict[str, Any]:
    return {
        **_format_item(details.item),
        "genres": list(details.genres),
        "runtime": details.runtime,
        "seasons": [
            {"number": s.number, "name": s.name, "episode_count": s.episode_count}
            for s in details.seasons
        ],
    }


def _format_episode(episode: Episode) -> dict[str, Any]:
    return {
        "number": episode.number,
        "name": episode.name,
        "overview": episode.overview,
        "air_date": episode.air_date,
        "still": episode.still,
    }


def _format_trailer(trailer: Trailer) -> dict[str, Any]:
    return {"name": trailer.name, "url": trailer.url, "official": trailer.official}


def _require_tmdb(request: Request) -> MetadataClientPort:
    state = cast(AppState, request.app.state)
    tmdb = getattr(state, "tmdb_client", None)
    if tmdb is None:
        raise HTTPException(status_code=404, detail="Catalog is not configured")
    return tmdb


@router.get("/trending/{content_type}")
async def trending(request: Request, content_type: str) -> JSONResponse:
    state = cast(AppState, request.app.state)
    tmdb = getattr(state, "tmdb_client", None)
    if tmdb is None:
        return JSONResponse(content={"items": []})

    try:
        if content_type == "movie":
            items = await tmdb.trending_movies()
        elif content_type == "series":
            items = await tmdb.trending_tv()
        else:
            return JSONResponse(content={"items": []})
    except Exception:
        log.warning("catalog_trending_failed", content_type=content_type, exc_info=True)
        return JSONResponse(content={"items": []})

    return JSONResponse(content={"items": [_format_item(i) for i in items]})


@router.get("/search")
async def search(
    request: Request, query: str = "", type: str = "movie"
) -> JSONResponse:
    state = cast(AppState, request.app.state)
    tmdb = getattr(state, "tmdb_client", None)
    if tmdb is None or not query.strip():
        return JSONResponse(content={"items": []})

    try:
        if type == "movie":
            items = await tmdb.search_movies(query=query.strip())
        elif type == "series":
            items = await tmdb.search_tv(query=query.strip())
        else:
            return JSONResponse(content={"items": []})
    except Exception:
        log.warning("catalog_search_failed", content_type=type, exc_info=True)
        return JSONResponse(content={"items": []})

    return JSONResponse(content={"items": [_format_item(i) for i in items]})


@router.get("/title/{content_type}/{content_id}")
async def title_details(
    request: Request, content_type: MediaKind, content_id: str
) -> JSONResponse:
    """Details for one title; series include their season list."""
    details = await _require_tmdb(request).details(content_id, content_type)
    if details is None:
        raise HTTPException(status_code=404, detail=f"Title not found: {content_id}")
    return JSONResponse(content={"title": _format_details(details)})


@router.get("/title/series/{content_id}/season/{season}")
async def season_episodes(
    request: Request, content_id: str, season: int = Path(ge=1)
) -> JSONResponse:
    """Episode list feeding the season/episode picker."""
    episodes = await _require_tmdb(request).season_episodes(content_id, season)
    if not episodes:
        raise HTTPException(
            status_code=404, detail=f"Season {season} not found: {content_id}"
        )
    return JSONResponse(content={"episodes": [_format_episode(e) for e in episodes]})


@router.get("/trailer/{content_type}/{content_id}")
async def trailer(
    request: Request, content_type: MediaKind, content_id: str
) -> JSONResponse:
    found = await _require_tmdb(request).trailer(content_id, content_type)
    if found is None:
        raise HTTPException(status_code=404, detail=f"No trailer for {content_id}")
    return JSONResponse(content={"trailer": _format_trailer(found)})
