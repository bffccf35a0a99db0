"""Request identity, as forwarded by the authenticating proxy."""

from __future__ import annotations

from typing import cast

import structlog
from fastapi import Depends, HTTPException, Request

from embedarr.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


def current_user(request: Request) -> str:
    """Lower-cased e-mail of the signed-in caller. 401 when absent."""
    state = cast(AppState, request.app.state)
    header = state.config.admin.identity_header
    email = (request.headers.get(header) or "").strip().lower()
    if not email:
        raise HTTPException(status_code=401, detail="Sign-in required")
    return email


def require_admin(request: Request, user: str = Depends(current_user)) -> str:
    """The caller's e-mail, if it is on the admin list. 403 otherwise."""
    state = cast(AppState, request.app.state)
    if not state.config.admin.is_admin(user):
        log.warning("admin_access_denied", path=request.url.path)
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
