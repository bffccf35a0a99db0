"""Wishlist endpoints for the signed-in user."""

from __future__ import annotations

from typing import Any, cast

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, field_validator

from embedarr.domain.entities import (
    MediaKind,
    WishlistItem,
    WishlistItemExists,
    WishlistItemNotFound,
)
from embedarr.interfaces.api.identity import current_user
from embedarr.interfaces.app_state import AppState

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


class WishlistPayload(BaseModel):
    content_id: str
    content_type: MediaKind
    title: str
    poster: str = ""

    @field_validator("content_id", "title")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


def _format_item(item: WishlistItem) -> dict[str, Any]:
    return {
        "content_id": item.content_id,
        "content_type": item.content_type,
        "title": item.title,
        "poster": item.poster,
        "added_at": item.added_at.isoformat() if item.added_at else None,
    }


@router.get("")
async def list_wishlist(
    request: Request, user: str = Depends(current_user)
) -> JSONResponse:
    state = cast(AppState, request.app.state)
    items = await state.wishlist_uc.list_items(user)
    return JSONResponse(content={"items": [_format_item(i) for i in items]})


@router.post("")
async def add_to_wishlist(
    payload: WishlistPayload,
    request: Request,
    user: str = Depends(current_user),
) -> JSONResponse:
    state = cast(AppState, request.app.state)
    item = WishlistItem(
        content_id=payload.content_id,
        content_type=payload.content_type,
        title=payload.title,
        poster=payload.poster,
    )
    try:
        saved = await state.wishlist_uc.add(user, item)
    except WishlistItemExists as e:
        raise HTTPException(
            status_code=409, detail=f"Already on wishlist: {payload.content_id}"
        ) from e
    return JSONResponse(content=_format_item(saved), status_code=201)


@router.delete("/{content_id}", status_code=204)
async def remove_from_wishlist(
    content_id: str,
    request: Request,
    user: str = Depends(current_user),
) -> Response:
    state = cast(AppState, request.app.state)
    try:
        await state.wishlist_uc.remove(user, content_id)
    except WishlistItemNotFound as e:
        raise HTTPException(
            status_code=404, detail=f"Not on wishlist: {content_id}"
        ) from e
    return Response(status_code=204)
