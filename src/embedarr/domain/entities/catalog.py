"""Catalog, changelog and wishlist entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from embedarr.domain.entities.servers import MediaKind


@dataclass(frozen=True)
class CatalogItem:
    """A title as listed in trending/search results."""

    id: str  # IMDb ID when known, otherwise "tmdb:<id>"
    type: MediaKind
    name: str
    poster: str = ""
    description: str = ""
    release_info: str = ""  # Year, e.g. "2024"
    rating: str = ""


@dataclass(frozen=True)
class ChangelogEntry:
    """A published release note."""

    version: str
    title: str
    description: str
    changes: tuple[str, ...] = field(default_factory=tuple)
    id: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class WishlistItem:
    """A title a user saved for later."""

    content_id: str
    content_type: MediaKind
    title: str
    poster: str = ""
    added_at: datetime | None = None


@dataclass(frozen=True)
class SeasonSummary:
    number: int
    name: str
    episode_count: int = 0


@dataclass(frozen=True)
class TitleDetails:
    """Full record for one title, as shown on its detail page."""

    item: CatalogItem
    genres: tuple[str, ...] = ()
    runtime: int | None = None  # minutes, movies only
    seasons: tuple[SeasonSummary, ...] = ()  # series only, specials excluded


@dataclass(frozen=True)
class Episode:
    """One episode of a season, used to fill the episode picker."""

    number: int
    name: str
    overview: str = ""
    air_date: str = ""
    still: str = ""


@dataclass(frozen=True)
class Trailer:
    name: str
    url: str  # YouTube embed URL
    official: bool = False
