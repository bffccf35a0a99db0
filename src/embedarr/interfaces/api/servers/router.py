"""Streaming-server management endpoints."""

from __future__ import annotations

from typing import cast

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from embedarr.domain.entities import (
    BuiltInServerReadOnly,
    Err,
    ServerDefinition,
    ServerNotFound,
    TemplateKind,
)
from embedarr.interfaces.api.identity import require_admin
from embedarr.interfaces.api.presenter import (
    format_error,
    format_field_errors,
    format_server,
)
from embedarr.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/servers", tags=["servers"])


class ServerPayload(BaseModel):
    name: str
    movie_url_template: str
    tv_url_template: str
    description: str = ""

    def to_draft(self) -> ServerDefinition:
        return ServerDefinition(
            name=self.name,
            movie_url_template=self.movie_url_template,
            tv_url_template=self.tv_url_template,
            description=self.description,
        )


class TemplateCheckPayload(BaseModel):
    template: str
    kind: TemplateKind


@router.get("")
async def list_servers(request: Request) -> JSONResponse:
    state = cast(AppState, request.app.state)
    servers = await state.server_admin_uc.list_servers()
    return JSONResponse(content={"servers": [format_server(s) for s in servers]})


@router.post("")
async def create_server(
    payload: ServerPayload,
    request: Request,
    admin: str = Depends(require_admin),
) -> JSONResponse:
    state = cast(AppState, request.app.state)
    result = await state.server_admin_uc.create(payload.to_draft())
    if isinstance(result, Err):
        return JSONResponse(content=format_field_errors(result.error), status_code=422)
    log.info("server_created_via_api", server_id=result.value.id, admin=admin)
    return JSONResponse(content=format_server(result.value), status_code=201)


@router.post("/validate")
async def validate_template(
    payload: TemplateCheckPayload,
    request: Request,
    admin: str = Depends(require_admin),
) -> JSONResponse:
    """Check a single template without saving anything."""
    state = cast(AppState, request.app.state)
    result = state.server_admin_uc.check_template(payload.template, payload.kind)
    if isinstance(result, Err):
        return JSONResponse(
            content={"valid": False, "error": format_error(result.error)}
        )
    return JSONResponse(content={"valid": True, "template": result.value})


@router.put("/{server_id}")
async def update_server(
    server_id: str,
    payload: ServerPayload,
    request: Request,
    admin: str = Depends(require_admin),
) -> JSONResponse:
    state = cast(AppState, request.app.state)
    try:
        result = await state.server_admin_uc.update(server_id, payload.to_draft())
    except BuiltInServerReadOnly as e:
        raise HTTPException(
            status_code=403, detail=f"Built-in server is read-only: {server_id}"
        ) from e
    except ServerNotFound as e:
        raise HTTPException(
            status_code=404, detail=f"Server not found: {server_id}"
        ) from e

    if isinstance(result, Err):
        return JSONResponse(content=format_field_errors(result.error), status_code=422)
    log.info("server_updated_via_api", server_id=server_id, admin=admin)
    return JSONResponse(content=format_server(result.value))


@router.delete("/{server_id}", status_code=204)
async def delete_server(
    server_id: str,
    request: Request,
    admin: str = Depends(require_admin),
) -> Response:
    state = cast(AppState, request.app.state)
    try:
        await state.server_admin_uc.delete(server_id)
    except BuiltInServerReadOnly as e:
        raise HTTPException(
            status_code=403, detail=f"Built-in server is read-only: {server_id}"
        ) from e
    except ServerNotFound as e:
        raise HTTPException(
            status_code=404, detail=f"Server not found: {server_id}"
        ) from e
    log.info("server_deleted_via_api", server_id=server_id, admin=admin)
    return Response(status_code=204)
