"""Custom server repository backed by RecordStorePort (diskcache/redis)."""

from __future__ import annotations

import asyncio
import json
import uuid
from dataclasses import replace
from datetime import datetime, timezone

import structlog

from embedarr.domain.entities.errors import RecordStoreError
from embedarr.domain.entities.servers import ServerDefinition
from embedarr.domain.ports.store import RecordStorePort

log = structlog.get_logger(__name__)

SERVERS_KEY = "servers:custom"


def _serialize_server(server: ServerDefinition) -> dict:
    return {
        "id": server.id,
        "name": server.name,
        "description": server.description,
        "movie_url_template": server.movie_url_template,
        "tv_url_template": server.tv_url_template,
        "created_at": server.created_at.isoformat() if server.created_at else None,
    }


def _deserialize_server(d: dict) -> ServerDefinition:
    created_at = d.get("created_at")
    return ServerDefinition(
        id=d["id"],
        name=d["name"],
        description=d.get("description", ""),
        movie_url_template=d["movie_url_template"],
        tv_url_template=d["tv_url_template"],
        created_at=datetime.fromisoformat(created_at) if created_at else None,
    )


class StoreServerRepository:
    """Keeps every custom server in one JSON list under ``servers:custom``.

    Writes are read-modify-write under a process-local lock. A write never
    proceeds over data it could not decode; store failures propagate.
    """

    def __init__(self, store: RecordStorePort) -> None:
        self.store = store
        self._lock = asyncio.Lock()

    async def _load(self, *, for_write: bool = False) -> list[ServerDefinition]:
        data = await self.store.get(SERVERS_KEY)
        if data is None:
            return []
        try:
            return [_deserialize_server(d) for d in json.loads(data)]
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            log.error("server_deserialize_error", key=SERVERS_KEY, error=str(e))
            if for_write:
                raise RecordStoreError(f"corrupt data under {SERVERS_KEY!r}") from e
            return []

    async def _save(self, servers: list[ServerDefinition]) -> None:
        payload = json.dumps([_serialize_server(s) for s in servers])
        await self.store.set(SERVERS_KEY, payload)

    async def list_all(self) -> list[ServerDefinition]:
        return await self._load()

    async def get(self, server_id: str) -> ServerDefinition | None:
        for server in await self._load():
            if server.id == server_id:
                return server
        return None

    async def add(self, server: ServerDefinition) -> ServerDefinition:
        saved = replace(
            server,
            id=uuid.uuid4().hex,
            is_built_in=False,
            created_at=datetime.now(timezone.utc),
        )
        async with self._lock:
            servers = await self._load(for_write=True)
            servers.append(saved)
            await self._save(servers)
        log.info("server_saved", server_id=saved.id, name=saved.name)
        return saved

    async def update(self, server: ServerDefinition) -> ServerDefinition | None:
        async with self._lock:
            servers = await self._load(for_write=True)
            for i, existing in enumerate(servers):
                if existing.id == server.id:
                    updated = replace(
                        server,
                        is_built_in=False,
                        created_at=existing.created_at,
                    )
                    servers[i] = updated
                    await self._save(servers)
                    break
            else:
                log.debug("server_not_found", server_id=server.id)
                return None
        log.info("server_updated", server_id=updated.id, name=updated.name)
        return updated

    async def delete(self, server_id: str) -> bool:
        async with self._lock:
            servers = await self._load(for_write=True)
            remaining = [s for s in servers if s.id != server_id]
            if len(remaining) == len(servers):
                return False
            await self._save(remaining)
        log.info("server_deleted", server_id=server_id)
        return True
