"""Shared repository behaviour for containers holding editable documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from council_portal.database.repositories.base import BaseRepository, Snapshot
from council_portal.models.base import format_timestamp
from council_portal.models.editable import EditableDocument

if TYPE_CHECKING:
    from datetime import datetime

E = TypeVar("E", bound=EditableDocument)


class EditableRepository(BaseRepository[E]):
    """Repository for a container whose documents carry priority leases."""

    async def list_stale_leases(self, cutoff: datetime) -> list[Snapshot[E]]:
        """Fetch documents whose lease was acquired before ``cutoff``."""
        return await self.query_snapshots(
            "SELECT * FROM c WHERE IS_DEFINED(c.priority_editor)"
            " AND NOT IS_NULL(c.priority_editor)"
            " AND c.priority_edit_started_at < @cutoff"
            " AND NOT IS_DEFINED(c.deleted_at)",
            [{"name": "@cutoff", "value": format_timestamp(cutoff)}],
        )

    async def list_leased(self) -> list[E]:
        """Fetch every document that currently has a priority editor."""
        return await self.query(
            "SELECT * FROM c WHERE IS_DEFINED(c.priority_editor)"
            " AND NOT IS_NULL(c.priority_editor)"
            " AND NOT IS_DEFINED(c.deleted_at)",
        )
