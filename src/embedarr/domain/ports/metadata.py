"""Port for movie metadata lookups (TMDB)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from embedarr.domain.entities.catalog import (
    CatalogItem,
    Episode,
    TitleDetails,
    Trailer,
)
from embedarr.domain.entities.servers import MediaKind


@runtime_checkable
class MetadataClientPort(Protocol):
    """Async interface for listings, title details and id mapping.

    ``content_id`` is an IMDb id (``tt...``) or a catalog id (``tmdb:<n>``).
    Lookups return None / empty when the title is unknown or the API fails.
    """

    async def trending_movies(self, page: int = 1) -> list[CatalogItem]: ...

    async def trending_tv(self, page: int = 1) -> list[CatalogItem]: ...

    async def search_movies(self, query: str, page: int = 1) -> list[CatalogItem]: ...

    async def search_tv(self, query: str, page: int = 1) -> list[CatalogItem]: ...

    async def imdb_id_for(self, content_id: str, media_kind: MediaKind) -> str | None:
        """IMDb id for a catalog id; IMDb ids are returned unchanged."""
        ...

    async def details(
        self, content_id: str, media_kind: MediaKind
    ) -> TitleDetails | None: ...

    async def season_episodes(self, content_id: str, season: int) -> list[Episode]: ...

    async def trailer(
        self, content_id: str, media_kind: MediaKind
    ) -> Trailer | None: ...
