"""Shared test fixtures for the Embedarr test suite."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from embedarr.domain.entities import (
    ChangelogEntry,
    PlaybackRequest,
    ServerDefinition,
    WishlistItem,
)

# ---------------------------------------------------------------------------
# Domain entity fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def custom_server() -> ServerDefinition:
    """A persisted admin-managed server."""
    return ServerDefinition(
        id="3f2a9c1e5b7d4e6f8a0b1c2d3e4f5a6b",
        name="Jupiter",
        description="Community mirror",
        movie_url_template="https://player.example.com/movie/{imdbId}",
        tv_url_template="https://player.example.com/tv/{imdbId}/{season}/{episode}",
        created_at=datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc),
    )


@pytest.fixture()
def server_draft() -> ServerDefinition:
    """A valid draft as submitted by the admin form (not yet saved)."""
    return ServerDefinition(
        name="  Jupiter  ",
        movie_url_template=" https://player.example.com/movie/{imdbId} ",
        tv_url_template="https://player.example.com/tv/{imdbId}/{season}/{episode}",
    )


@pytest.fixture()
def movie_request() -> PlaybackRequest:
    return PlaybackRequest(content_id="tt11389872", media_kind="movie")


@pytest.fixture()
def episode_request() -> PlaybackRequest:
    return PlaybackRequest(
        content_id="tt0944947", media_kind="series", season=2, episode=5
    )


@pytest.fixture()
def changelog_entry() -> ChangelogEntry:
    return ChangelogEntry(
        id="c0ffee",
        version="1.4.0",
        title="New servers",
        description="Two more mirrors.",
        changes=("Added Jupiter", "Fixed subtitles"),
        created_at=datetime(2025, 2, 1, 9, 30, 0, tzinfo=timezone.utc),
    )


@pytest.fixture()
def wishlist_item() -> WishlistItem:
    return WishlistItem(
        content_id="tt0111161",
        content_type="movie",
        title="The Shawshank Redemption",
        poster="https://image.tmdb.org/t/p/w500/poster.jpg",
    )


# ---------------------------------------------------------------------------
# Mock port fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_store() -> AsyncMock:
    """Mock RecordStorePort (empty by default)."""
    store = AsyncMock()
    store.get = AsyncMock(return_value=None)
    store.set = AsyncMock()
    store.delete = AsyncMock(return_value=True)
    store.exists = AsyncMock(return_value=False)
    store.clear = AsyncMock()
    store.aclose = AsyncMock()
    return store


@pytest.fixture()
def mock_server_repo() -> AsyncMock:
    """Mock ServerRepository with no custom servers."""
    repo = AsyncMock()
    repo.list_all = AsyncMock(return_value=[])
    repo.get = AsyncMock(return_value=None)
    repo.delete = AsyncMock(return_value=False)
    return repo
