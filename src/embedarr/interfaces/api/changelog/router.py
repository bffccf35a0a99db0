"""Changelog endpoints."""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from embedarr.domain.entities import ChangelogEntry, Err
from embedarr.interfaces.api.identity import require_admin
from embedarr.interfaces.api.presenter import format_field_errors
from embedarr.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/changelog", tags=["changelog"])


class ChangelogPayload(BaseModel):
    version: str
    title: str
    description: str
    changes: list[str] = Field(default_factory=list)


def _format_entry(entry: ChangelogEntry) -> dict[str, Any]:
    return {
        "id": entry.id,
        "version": entry.version,
        "title": entry.title,
        "description": entry.description,
        "changes": list(entry.changes),
        "created_at": entry.created_at.isoformat() if entry.created_at else None,
    }


@router.get("")
async def list_changelog(request: Request) -> JSONResponse:
    state = cast(AppState, request.app.state)
    entries = await state.changelog_uc.list_entries()
    return JSONResponse(content={"entries": [_format_entry(e) for e in entries]})


@router.post("")
async def publish_changelog(
    payload: ChangelogPayload,
    request: Request,
    admin: str = Depends(require_admin),
) -> JSONResponse:
    state = cast(AppState, request.app.state)
    draft = ChangelogEntry(
        version=payload.version,
        title=payload.title,
        description=payload.description,
        changes=tuple(payload.changes),
    )
    result = await state.changelog_uc.publish(draft)
    if isinstance(result, Err):
        return JSONResponse(content=format_field_errors(result.error), status_code=422)
    log.info("changelog_published_via_api", version=result.value.version, admin=admin)
    return JSONResponse(content=_format_entry(result.value), status_code=201)
