"""Tests for ChangelogUseCase and WishlistUseCase."""

from __future__ import annotations

from dataclasses import replace
from unittest.mock import AsyncMock

import pytest

from embedarr.application.use_cases import ChangelogUseCase, WishlistUseCase
from embedarr.domain.entities import (
    ChangelogEntry,
    Err,
    Ok,
    WishlistItem,
    WishlistItemExists,
    WishlistItemNotFound,
)
from embedarr.domain.entities.templating import BlankField, EmptyChangeList

# ---------------------------------------------------------------------------
# Changelog
# ---------------------------------------------------------------------------


class TestChangelogPublish:
    async def test_strips_and_drops_blank_changes(
        self, changelog_entry: ChangelogEntry
    ) -> None:
        repo = AsyncMock()
        repo.add.side_effect = lambda e: replace(e, id="saved")
        use_case = ChangelogUseCase(repo)
        draft = replace(
            changelog_entry,
            id="client-chosen",
            version=" 1.4.0 ",
            changes=("  Added Jupiter ", "", "   "),
        )

        result = await use_case.publish(draft)

        assert isinstance(result, Ok)
        assert result.value.id == "saved"
        stored = repo.add.call_args[0][0]
        assert stored.id is None
        assert stored.version == "1.4.0"
        assert stored.changes == ("Added Jupiter",)

    async def test_reports_every_blank_field(self) -> None:
        repo = AsyncMock()
        use_case = ChangelogUseCase(repo)
        draft = ChangelogEntry(version="", title=" ", description="", changes=(" ",))

        result = await use_case.publish(draft)

        assert result == Err(
            {
                "version": BlankField("version"),
                "title": BlankField("title"),
                "description": BlankField("description"),
                "changes": EmptyChangeList(),
            }
        )
        repo.add.assert_not_awaited()

    async def test_list_entries(self, changelog_entry: ChangelogEntry) -> None:
        repo = AsyncMock()
        repo.list_all.return_value = [changelog_entry]
        assert await ChangelogUseCase(repo).list_entries() == [changelog_entry]


# ---------------------------------------------------------------------------
# Wishlist
# ---------------------------------------------------------------------------


class TestWishlist:
    async def test_add(self, wishlist_item: WishlistItem) -> None:
        repo = AsyncMock()
        repo.add.return_value = wishlist_item
        saved = await WishlistUseCase(repo).add("me@example.com", wishlist_item)
        assert saved == wishlist_item
        repo.add.assert_awaited_once_with("me@example.com", wishlist_item)

    async def test_add_duplicate_raises(self, wishlist_item: WishlistItem) -> None:
        repo = AsyncMock()
        repo.add.return_value = None
        with pytest.raises(WishlistItemExists):
            await WishlistUseCase(repo).add("me@example.com", wishlist_item)

    async def test_remove_missing_raises(self) -> None:
        repo = AsyncMock()
        repo.remove.return_value = False
        with pytest.raises(WishlistItemNotFound):
            await WishlistUseCase(repo).remove("me@example.com", "tt1")

    async def test_remove(self) -> None:
        repo = AsyncMock()
        repo.remove.return_value = True
        await WishlistUseCase(repo).remove("me@example.com", "tt1")
        repo.remove.assert_awaited_once_with("me@example.com", "tt1")
