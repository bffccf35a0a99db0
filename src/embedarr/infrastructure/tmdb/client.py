"""TMDB API client - async httpx implementation with caching."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from embedarr.domain.entities.catalog import (
    CatalogItem,
    Episode,
    SeasonSummary,
    TitleDetails,
    Trailer,
)
from embedarr.domain.entities.errors import RecordStoreError
from embedarr.domain.entities.servers import MediaKind
from embedarr.domain.ports.store import RecordStorePort

log = structlog.get_logger(__name__)

_BASE_URL = "https://api.themoviedb.org/3"
_POSTER_BASE = "https://image.tmdb.org/t/p/w500"
_STILL_BASE = "https://image.tmdb.org/t/p/w300"
_YOUTUBE_EMBED = "https://www.youtube.com/embed/"

# Cache TTLs (seconds)
_TTL_TRENDING = 21_600  # 6 hours
_TTL_SEARCH = 3_600  # 1 hour
_TTL_DETAILS = 86_400  # 1 day
_TTL_ID_MAP = 604_800  # 7 days, id mappings never change


class HttpxTmdbClient:
    """Async TMDB client using httpx + RecordStorePort.

    Implements ``MetadataClientPort`` from domain.ports.metadata.
    """

    def __init__(
        self,
        *,
        api_key: str,
        http_client: httpx.AsyncClient,
        store: RecordStorePort,
        language: str = "en-US",
    ) -> None:
        self._api_key = api_key
        self._http = http_client
        self._store = store
        self._language = language

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _params(self, **extra: Any) -> dict[str, Any]:
        return {"api_key": self._api_key, "language": self._language, **extra}

    async def _get(self, path: str, **extra: Any) -> dict[str, Any] | None:
        """GET request with error handling. Returns parsed JSON or None."""
        url = f"{_BASE_URL}{path}"
        try:
            resp = await self._http.get(url, params=self._params(**extra))
            if resp.status_code == 401:
                log.error("tmdb_api_key_invalid", status=401)
                return None
            if resp.status_code == 404:
                log.debug("tmdb_resource_not_found", path=path)
                return None
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError:
            log.warning("tmdb_http_error", path=path, exc_info=True)
            return None
        except httpx.HTTPError:
            log.warning("tmdb_network_error", path=path, exc_info=True)
            return None

    async def _cache_get(self, key: str) -> Any:
        # The response cache is optional: an unreachable store means a refetch
        try:
            return await self._store.get(key)
        except RecordStoreError:
            log.warning("tmdb_cache_read_failed", key=key)
            return None

    async def _cache_set(self, key: str, value: Any, ttl: int) -> None:
        try:
            await self._store.set(key, value, ttl=ttl)
        except RecordStoreError:
            log.warning("tmdb_cache_write_failed", key=key)

    @staticmethod
    def _endpoint(media_kind: MediaKind) -> str:
        return "tv" if media_kind == "series" else "movie"

    @staticmethod
    def _poster_url(poster_path: str | None) -> str:
        if not poster_path:
            return ""
        return f"{_POSTER_BASE}{poster_path}"

    @staticmethod
    def _still_url(still_path: str | None) -> str:
        if not still_path:
            return ""
        return f"{_STILL_BASE}{still_path}"

    @staticmethod
    def _content_id(item: dict[str, Any]) -> str:
        """IMDb ID when TMDB includes one, else ``tmdb:<id>``.

        Only detail responses (``append_to_response=external_ids``) carry the
        IMDb ID; list endpoints never do.
        """
        imdb_id = item.get("imdb_id") or item.get("external_ids", {}).get("imdb_id")
        if imdb_id:
            return imdb_id
        tmdb_id = item.get("id", "")
        return f"tmdb:{tmdb_id}" if tmdb_id else ""

    @staticmethod
    def _rating(item: dict[str, Any]) -> str:
        vote = item.get("vote_average")
        return f"{vote:.1f}" if vote else ""

    def _movie_to_item(self, movie: dict[str, Any]) -> CatalogItem:
        release_date = movie.get("release_date") or ""
        return CatalogItem(
            id=self._content_id(movie),
            type="movie",
            name=movie.get("title", movie.get("original_title", "")),
            poster=self._poster_url(movie.get("poster_path")),
            description=movie.get("overview", ""),
            release_info=release_date[:4],
            rating=self._rating(movie),
        )

    def _tv_to_item(self, show: dict[str, Any]) -> CatalogItem:
        first_air = show.get("first_air_date") or ""
        return CatalogItem(
            id=self._content_id(show),
            type="series",
            name=show.get("name", show.get("original_name", "")),
            poster=self._poster_url(show.get("poster_path")),
            description=show.get("overview", ""),
            release_info=first_air[:4],
            rating=self._rating(show),
        )

    async def _listing(
        self,
        cache_key: str,
        path: str,
        ttl: int,
        *,
        series: bool,
        **extra: Any,
    ) -> list[CatalogItem]:
        cached = await self._cache_get(cache_key)
        if cached is not None:
            return cached

        data = await self._get(path, **extra)
        if data is None:
            return []

        convert = self._tv_to_item if series else self._movie_to_item
        items = [convert(r) for r in data.get("results", [])]
        await self._cache_set(cache_key, items, ttl)
        log.debug("tmdb_listing_cached", key=cache_key, count=len(items))
        return items

    # ------------------------------------------------------------------
    # Public API (MetadataClientPort)
    # ------------------------------------------------------------------

    async def trending_movies(self, page: int = 1) -> list[CatalogItem]:
        return await self._listing(
            f"tmdb:trending:movie:{self._language}:{page}",
            "/trending/movie/week",
            _TTL_TRENDING,
            series=False,
            page=page,
        )

    async def trending_tv(self, page: int = 1) -> list[CatalogItem]:
        return await self._listing(
            f"tmdb:trending:tv:{self._language}:{page}",
            "/trending/tv/week",
            _TTL_TRENDING,
            series=True,
            page=page,
        )

    async def search_movies(self, query: str, page: int = 1) -> list[CatalogItem]:
        return await self._listing(
            f"tmdb:search:movie:{self._language}:{query}:{page}",
            "/search/movie",
            _TTL_SEARCH,
            series=False,
            query=query,
            page=page,
        )

    async def search_tv(self, query: str, page: int = 1) -> list[CatalogItem]:
        return await self._listing(
            f"tmdb:search:tv:{self._language}:{query}:{page}",
            "/search/tv",
            _TTL_SEARCH,
            series=True,
            query=query,
            page=page,
        )

    # ------------------------------------------------------------------
    # Title lookups
    # ------------------------------------------------------------------

    async def _find(self, imdb_id: str, media_kind: MediaKind) -> dict[str, Any] | None:
        """Lookup the TMDB entry for an IMDb ID via ``/find``."""
        endpoint = self._endpoint(media_kind)
        cache_key = f"tmdb:find:{endpoint}:{imdb_id}"
        cached = await self._cache_get(cache_key)
        if cached is not None:
            return cached

        data = await self._get(f"/find/{imdb_id}", external_source="imdb_id")
        if data is None:
            return None

        # /find returns lists grouped by media type
        results = data.get(f"{endpoint}_results", [])
        if not results:
            return None
        result = results[0]
        await self._cache_set(cache_key, result, _TTL_ID_MAP)
        return result

    async def _tmdb_id(self, content_id: str, media_kind: MediaKind) -> int | None:
        if content_id.startswith("tmdb:"):
            raw = content_id.removeprefix("tmdb:")
            return int(raw) if raw.isdigit() else None
        found = await self._find(content_id, media_kind)
        if found is None or not found.get("id"):
            return None
        return int(found["id"])

    async def imdb_id_for(self, content_id: str, media_kind: MediaKind) -> str | None:
        """Map a ``tmdb:<n>`` catalog id to its IMDb ID.

        Trending and search results carry no IMDb IDs, so catalog items
        use the TMDB id until they are played.
        """
        if not content_id.startswith("tmdb:"):
            return content_id

        tmdb_id = await self._tmdb_id(content_id, media_kind)
        if tmdb_id is None:
            return None

        endpoint = self._endpoint(media_kind)
        cache_key = f"tmdb:imdb:{endpoint}:{tmdb_id}"
        cached = await self._cache_get(cache_key)
        if cached is not None:
            return cached

        data = await self._get(f"/{endpoint}/{tmdb_id}/external_ids")
        imdb_id = (data or {}).get("imdb_id") or None
        if imdb_id is None:
            log.info("tmdb_imdb_id_missing", content_id=content_id)
            return None
        await self._cache_set(cache_key, imdb_id, _TTL_ID_MAP)
        return imdb_id

    async def details(
        self, content_id: str, media_kind: MediaKind
    ) -> TitleDetails | None:
        tmdb_id = await self._tmdb_id(content_id, media_kind)
        if tmdb_id is None:
            return None

        endpoint = self._endpoint(media_kind)
        cache_key = f"tmdb:details:{endpoint}:{self._language}:{tmdb_id}"
        cached = await self._cache_get(cache_key)
        if cached is not None:
            return cached

        data = await self._get(
            f"/{endpoint}/{tmdb_id}", append_to_response="external_ids"
        )
        if data is None:
            return None

        if media_kind == "series":
            item = self._tv_to_item(data)
            seasons = tuple(
                SeasonSummary(
                    number=s["season_number"],
                    name=s.get("name", ""),
                    episode_count=s.get("episode_count") or 0,
                )
                for s in data.get("seasons", [])
                # season 0 holds specials
                if s.get("season_number", 0) > 0
            )
        else:
            item = self._movie_to_item(data)
            seasons = ()

        details = TitleDetails(
            item=item,
            genres=tuple(g["name"] for g in data.get("genres", []) if g.get("name")),
            runtime=data.get("runtime") or None,
            seasons=seasons,
        )
        await self._cache_set(cache_key, details, _TTL_DETAILS)
        return details

    async def season_episodes(self, content_id: str, season: int) -> list[Episode]:
        tmdb_id = await self._tmdb_id(content_id, "series")
        if tmdb_id is None:
            return []

        cache_key = f"tmdb:season:{self._language}:{tmdb_id}:{season}"
        cached = await self._cache_get(cache_key)
        if cached is not None:
            return cached

        data = await self._get(f"/tv/{tmdb_id}/season/{season}")
        if data is None:
            return []

        episodes = [
            Episode(
                number=ep["episode_number"],
                name=ep.get("name", ""),
                overview=ep.get("overview", ""),
                air_date=ep.get("air_date") or "",
                still=self._still_url(ep.get("still_path")),
            )
            for ep in data.get("episodes", [])
            if ep.get("episode_number")
        ]
        await self._cache_set(cache_key, episodes, _TTL_DETAILS)
        return episodes

    async def trailer(self, content_id: str, media_kind: MediaKind) -> Trailer | None:
        """First YouTube trailer, official ones preferred."""
        tmdb_id = await self._tmdb_id(content_id, media_kind)
        if tmdb_id is None:
            return None

        endpoint = self._endpoint(media_kind)
        cache_key = f"tmdb:trailer:{endpoint}:{self._language}:{tmdb_id}"
        cached = await self._cache_get(cache_key)
        if cached is not None:
            return cached

        language = self._language.split("-")[0]
        data = await self._get(
            f"/{endpoint}/{tmdb_id}/videos",
            include_video_language=f"{language},en,null",
        )
        if data is None:
            return None

        candidates = [
            v
            for v in data.get("results", [])
            if v.get("key")
            and v.get("site") == "YouTube"
            and v.get("type") == "Trailer"
        ]
        if not candidates:
            return None
        # stable sort keeps TMDB's order within each group
        best = sorted(candidates, key=lambda v: not v.get("official", False))[0]

        trailer = Trailer(
            name=best.get("name", ""),
            url=f"{_YOUTUBE_EMBED}{best['key']}",
            official=bool(best.get("official", False)),
        )
        await self._cache_set(cache_key, trailer, _TTL_DETAILS)
        return trailer
