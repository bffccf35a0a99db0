"""Domain entities for streaming servers and playback.

Pure value objects: no framework dependencies, no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

MediaKind = Literal["movie", "series"]
TemplateKind = Literal["movie", "tv"]


def template_kind_for(media_kind: MediaKind) -> TemplateKind:
    """Map a playback media kind to the template it is served from."""
    return "tv" if media_kind == "series" else "movie"


@dataclass(frozen=True)
class ServerDefinition:
    """A streaming server: display name plus one URL template per kind."""

    name: str
    movie_url_template: str  # must contain {imdbId}
    tv_url_template: str  # must contain {imdbId}, {season}, {episode}
    id: str | None = None  # None for drafts not yet persisted
    description: str = ""
    is_built_in: bool = False
    created_at: datetime | None = None

    def template_for(self, media_kind: MediaKind) -> str:
        if template_kind_for(media_kind) == "tv":
            return self.tv_url_template
        return self.movie_url_template


@dataclass(frozen=True)
class PlaybackRequest:
    """What the viewer wants to play.

    ``season`` and ``episode`` are only meaningful for ``series``.
    """

    content_id: str  # IMDb ID, e.g. "tt11389872"
    media_kind: MediaKind
    season: int | None = None
    episode: int | None = None


@dataclass(frozen=True)
class ResolvedUrl:
    """A fully substituted embed URL and the server it came from."""

    url: str
    server_id: str | None
    server_name: str
