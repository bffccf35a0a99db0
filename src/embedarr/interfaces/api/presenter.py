"""JSON shapes shared by several routers."""

from __future__ import annotations

from typing import Any

from embedarr.domain.entities import ServerDefinition
from embedarr.domain.entities.templating import ResolutionError, ValidationError


def format_error(error: ValidationError | ResolutionError) -> dict[str, str]:
    return {"kind": error.kind, "message": error.message}


def format_field_errors(errors: dict[str, ValidationError]) -> dict[str, Any]:
    """Body of a 422 for rejected drafts: ``{"errors": {field: {...}}}``."""
    return {"errors": {name: format_error(e) for name, e in errors.items()}}


def format_server(server: ServerDefinition) -> dict[str, Any]:
    return {
        "id": server.id,
        "name": server.name,
        "description": server.description,
        "movie_url_template": server.movie_url_template,
        "tv_url_template": server.tv_url_template,
        "is_built_in": server.is_built_in,
        "created_at": server.created_at.isoformat() if server.created_at else None,
    }
