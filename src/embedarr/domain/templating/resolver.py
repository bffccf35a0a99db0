"""Turn a server template plus a playback request into an embed URL.

Pure string work. The template is assumed to have passed validation when
the server was saved; it is not re-checked here.
"""

from __future__ import annotations

from urllib.parse import quote

from embedarr.domain.entities.results import Err, Ok, Result
from embedarr.domain.entities.servers import (
    PlaybackRequest,
    ResolvedUrl,
    ServerDefinition,
)
from embedarr.domain.entities.templating import (
    EmptyContentId,
    MissingRequiredField,
    NonPositiveField,
    ResolutionError,
)
from embedarr.domain.templating.grammar import substitute


def _check_request(request: PlaybackRequest) -> ResolutionError | None:
    if not request.content_id.strip():
        return EmptyContentId()

    if request.media_kind != "series":
        return None

    for field, value in (("season", request.season), ("episode", request.episode)):
        if value is None:
            return MissingRequiredField(field)
        if value <= 0:
            return NonPositiveField(field, value)
    return None


def placeholder_values(request: PlaybackRequest) -> dict[str, str]:
    """Values keyed by placeholder name for a (checked) request."""
    values = {"imdbId": quote(request.content_id.strip(), safe="")}
    if request.media_kind == "series":
        values["season"] = str(request.season)
        values["episode"] = str(request.episode)
    return values


def resolve(
    definition: ServerDefinition, request: PlaybackRequest
) -> Result[ResolvedUrl, ResolutionError]:
    """Resolve the template matching ``request.media_kind``.

    Movie requests ignore season/episode. Series requests never fall back to
    season or episode 1.
    """
    problem = _check_request(request)
    if problem is not None:
        return Err(problem)

    template = definition.template_for(request.media_kind)
    url = substitute(template, placeholder_values(request))
    return Ok(
        ResolvedUrl(url=url, server_id=definition.id, server_name=definition.name)
    )
