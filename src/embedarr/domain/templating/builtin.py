"""Servers shipped with the application (read-only, always listed first)."""

from __future__ import annotations

from embedarr.domain.entities.servers import ServerDefinition

BUILTIN_ID_PREFIX = "builtin:"

BUILTIN_SERVERS: tuple[ServerDefinition, ...] = (
    ServerDefinition(
        id="builtin:mercury",
        name="Mercury",
        movie_url_template="https://vidsrc.xyz/embed/movie/{imdbId}",
        tv_url_template="https://vidsrc.xyz/embed/tv/{imdbId}/{season}/{episode}",
        is_built_in=True,
    ),
    ServerDefinition(
        id="builtin:venus",
        name="Venus",
        movie_url_template="https://www.2embed.cc/embed/{imdbId}",
        tv_url_template="https://www.2embed.cc/embedtv/{imdbId}&s={season}&e={episode}",
        is_built_in=True,
    ),
)


def is_builtin_id(server_id: str) -> bool:
    return server_id.startswith(BUILTIN_ID_PREFIX)


def get_builtin(server_id: str) -> ServerDefinition | None:
    for server in BUILTIN_SERVERS:
        if server.id == server_id:
            return server
    return None
