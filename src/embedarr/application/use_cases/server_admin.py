"""Streaming-server administration use case."""

from __future__ import annotations

from dataclasses import replace

import structlog

from embedarr.domain.entities import (
    BuiltInServerReadOnly,
    Err,
    Ok,
    Result,
    ServerDefinition,
    ServerNotFound,
    TemplateKind,
)
from embedarr.domain.entities.templating import ValidationError
from embedarr.domain.ports import ServerRepository
from embedarr.domain.templating import (
    BUILTIN_SERVERS,
    get_builtin,
    is_builtin_id,
    validate,
    validate_server,
)

log = structlog.get_logger(__name__)

DraftResult = Result[ServerDefinition, dict[str, ValidationError]]


class ServerAdminUseCase:
    """Lists, validates and persists streaming servers.

    Built-in servers come from code and are never written; admin-managed
    servers live in the repository and are validated before every write.
    """

    def __init__(self, repo: ServerRepository) -> None:
        self.repo = repo

    async def list_servers(self) -> list[ServerDefinition]:
        """Built-in servers first, then custom servers in creation order."""
        custom = await self.repo.list_all()
        return [*BUILTIN_SERVERS, *custom]

    async def get_server(self, server_id: str) -> ServerDefinition:
        builtin = get_builtin(server_id)
        if builtin is not None:
            return builtin
        server = await self.repo.get(server_id)
        if server is None:
            raise ServerNotFound(server_id)
        return server

    def check_template(
        self, template: str, kind: TemplateKind
    ) -> Result[str, ValidationError]:
        return validate(template, kind)

    async def create(self, draft: ServerDefinition) -> DraftResult:
        checked = validate_server(
            replace(draft, id=None, is_built_in=False, created_at=None)
        )
        if isinstance(checked, Err):
            log.info(
                "server_rejected",
                name=draft.name,
                fields=sorted(checked.error),
            )
            return checked

        saved = await self.repo.add(checked.value)
        log.info("server_created", server_id=saved.id, name=saved.name)
        return Ok(saved)

    async def update(self, server_id: str, draft: ServerDefinition) -> DraftResult:
        if is_builtin_id(server_id):
            raise BuiltInServerReadOnly(server_id)

        current = await self.repo.get(server_id)
        if current is None:
            raise ServerNotFound(server_id)

        checked = validate_server(
            replace(
                draft,
                id=server_id,
                is_built_in=False,
                created_at=current.created_at,
            )
        )
        if isinstance(checked, Err):
            log.info(
                "server_rejected",
                server_id=server_id,
                fields=sorted(checked.error),
            )
            return checked

        saved = await self.repo.update(checked.value)
        if saved is None:
            # deleted between get() and update()
            raise ServerNotFound(server_id)
        log.info("server_updated", server_id=server_id, name=saved.name)
        return Ok(saved)

    async def delete(self, server_id: str) -> None:
        if is_builtin_id(server_id):
            raise BuiltInServerReadOnly(server_id)
        if not await self.repo.delete(server_id):
            raise ServerNotFound(server_id)
        log.info("server_deleted", server_id=server_id)
