"""Changelog use case."""

from __future__ import annotations

from dataclasses import replace

import structlog

from embedarr.domain.entities import ChangelogEntry, Err, Ok, Result
from embedarr.domain.entities.templating import (
    BlankField,
    EmptyChangeList,
    ValidationError,
)
from embedarr.domain.ports import ChangelogRepository

log = structlog.get_logger(__name__)


class ChangelogUseCase:
    def __init__(self, repo: ChangelogRepository) -> None:
        self.repo = repo

    async def list_entries(self) -> list[ChangelogEntry]:
        return await self.repo.list_all()

    async def publish(
        self, draft: ChangelogEntry
    ) -> Result[ChangelogEntry, dict[str, ValidationError]]:
        """Validate and store a new entry.

        Blank change lines are dropped; at least one must remain.
        """
        errors: dict[str, ValidationError] = {}
        version = draft.version.strip()
        title = draft.title.strip()
        description = draft.description.strip()
        changes = tuple(c.strip() for c in draft.changes if c.strip())

        if not version:
            errors["version"] = BlankField("version")
        if not title:
            errors["title"] = BlankField("title")
        if not description:
            errors["description"] = BlankField("description")
        if not changes:
            errors["changes"] = EmptyChangeList()

        if errors:
            return Err(errors)

        saved = await self.repo.add(
            replace(
                draft,
                id=None,
                created_at=None,
                version=version,
                title=title,
                description=description,
                changes=changes,
            )
        )
        log.info("changelog_published", entry_id=saved.id, version=saved.version)
        return Ok(saved)
