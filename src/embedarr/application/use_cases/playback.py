"""Playback use case: resolve embed URLs for every known server."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

import structlog

from embedarr.application.use_cases.server_admin import ServerAdminUseCase
from embedarr.domain.entities import (
    Err,
    PlaybackRequest,
    ResolvedUrl,
    Result,
    ServerDefinition,
)
from embedarr.domain.entities.templating import ResolutionError, UnknownContentId
from embedarr.domain.ports import MetadataClientPort
from embedarr.domain.templating import resolve

log = structlog.get_logger(__name__)

CATALOG_ID_PREFIX = "tmdb:"


@dataclass(frozen=True)
class UnavailableServer:
    """A server that cannot serve this request, with the reason."""

    server: ServerDefinition
    error: ResolutionError


@dataclass(frozen=True)
class PlaybackSources:
    """Everything the player needs to render its source buttons."""

    request: PlaybackRequest
    sources: list[ResolvedUrl] = field(default_factory=list)
    unavailable: list[UnavailableServer] = field(default_factory=list)

    @property
    def request_error(self) -> ResolutionError | None:
        """The shared error when no server could resolve the request."""
        if self.sources or not self.unavailable:
            return None
        return self.unavailable[0].error


class PlaybackUseCase:
    """Resolves a playback request against the configured servers.

    A server whose resolution fails is reported as unavailable; the
    remaining servers are still offered. Catalog ids (``tmdb:<n>``) are
    mapped to IMDb ids first, since every embed template expects one.
    """

    def __init__(
        self,
        servers: ServerAdminUseCase,
        metadata: MetadataClientPort | None = None,
    ) -> None:
        self.servers = servers
        self.metadata = metadata

    async def _playable(
        self, request: PlaybackRequest
    ) -> PlaybackRequest | ResolutionError:
        content_id = request.content_id.strip()
        if not content_id.startswith(CATALOG_ID_PREFIX):
            return request

        imdb_id = None
        if self.metadata is not None:
            imdb_id = await self.metadata.imdb_id_for(content_id, request.media_kind)
        if not imdb_id:
            log.info("playback_content_id_unmapped", content_id=content_id)
            return UnknownContentId(content_id)

        log.debug("playback_content_id_mapped", content_id=content_id, imdb_id=imdb_id)
        return replace(request, content_id=imdb_id)

    async def sources(self, request: PlaybackRequest) -> PlaybackSources:
        servers = await self.servers.list_servers()
        playable = await self._playable(request)
        if isinstance(playable, ResolutionError):
            unavailable = [UnavailableServer(s, playable) for s in servers]
            return PlaybackSources(request, [], unavailable)

        resolved: list[ResolvedUrl] = []
        unavailable = []

        for server in servers:
            result = resolve(server, playable)
            if isinstance(result, Err):
                unavailable.append(UnavailableServer(server, result.error))
                log.debug(
                    "playback_server_unavailable",
                    server_id=server.id,
                    content_id=playable.content_id,
                    error=result.error.kind,
                )
                continue
            resolved.append(result.value)

        log.info(
            "playback_sources_resolved",
            content_id=playable.content_id,
            media_kind=playable.media_kind,
            season=playable.season,
            episode=playable.episode,
            resolved=len(resolved),
            unavailable=len(unavailable),
        )
        return PlaybackSources(playable, resolved, unavailable)

    async def resolve_with(
        self, server_id: str, request: PlaybackRequest
    ) -> Result[ResolvedUrl, ResolutionError]:
        """Resolve on one server. Raises ServerNotFound for unknown ids."""
        server = await self.servers.get_server(server_id)
        playable = await self._playable(request)
        if isinstance(playable, ResolutionError):
            return Err(playable)
        return resolve(server, playable)
