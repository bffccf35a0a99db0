"""Changelog repository backed by RecordStorePort."""

from __future__ import annotations

import asyncio
import json
import uuid
from dataclasses import replace
from datetime import datetime, timezone

import structlog

from embedarr.domain.entities.catalog import ChangelogEntry
from embedarr.domain.entities.errors import RecordStoreError
from embedarr.domain.ports.store import RecordStorePort

log = structlog.get_logger(__name__)

CHANGELOG_KEY = "changelog:entries"


def _serialize_entry(entry: ChangelogEntry) -> dict:
    return {
        "id": entry.id,
        "version": entry.version,
        "title": entry.title,
        "description": entry.description,
        "changes": list(entry.changes),
        "created_at": entry.created_at.isoformat() if entry.created_at else None,
    }


def _deserialize_entry(d: dict) -> ChangelogEntry:
    created_at = d.get("created_at")
    return ChangelogEntry(
        id=d["id"],
        version=d["version"],
        title=d["title"],
        description=d.get("description", ""),
        changes=tuple(d.get("changes", [])),
        created_at=datetime.fromisoformat(created_at) if created_at else None,
    )


class StoreChangelogRepository:
    """Entries live newest-first in one JSON list."""

    def __init__(self, store: RecordStorePort) -> None:
        self.store = store
        self._lock = asyncio.Lock()

    async def _load(self, *, for_write: bool = False) -> list[ChangelogEntry]:
        data = await self.store.get(CHANGELOG_KEY)
        if data is None:
            return []
        try:
            return [_deserialize_entry(d) for d in json.loads(data)]
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            log.error("changelog_deserialize_error", key=CHANGELOG_KEY, error=str(e))
            if for_write:
                raise RecordStoreError(f"corrupt data under {CHANGELOG_KEY!r}") from e
            return []

    async def list_all(self) -> list[ChangelogEntry]:
        return await self._load()

    async def add(self, entry: ChangelogEntry) -> ChangelogEntry:
        saved = replace(
            entry, id=uuid.uuid4().hex, created_at=datetime.now(timezone.utc)
        )
        async with self._lock:
            entries = await self._load(for_write=True)
            entries.insert(0, saved)
            await self.store.set(
                CHANGELOG_KEY, json.dumps([_serialize_entry(e) for e in entries])
            )
        log.debug("changelog_entry_saved", entry_id=saved.id, version=saved.version)
        return saved
