"""Repository modules for each Cosmos DB container."""

from __future__ import annotations

from typing import TYPE_CHECKING

from council_portal.database.repositories.base import BaseRepository, Snapshot
from council_portal.database.repositories.editable import EditableRepository
from council_portal.database.repositories.handbook import HandbookSectionRepository
from council_portal.database.repositories.memorandums import MemorandumRepository
from council_portal.database.repositories.policies import PolicySectionRepository
from council_portal.database.repositories.users import UserRepository
from council_portal.models.editable import DocumentKind

if TYPE_CHECKING:
    from azure.cosmos.aio import DatabaseProxy

EDITABLE_REPOSITORIES: dict[DocumentKind, type[EditableRepository]] = {
    DocumentKind.HANDBOOK: HandbookSectionRepository,
    DocumentKind.MEMORANDUMS: MemorandumRepository,
    DocumentKind.POLICIES: PolicySectionRepository,
}

CONTAINER_NAMES = (
    *(repo.container_name for repo in EDITABLE_REPOSITORIES.values()),
    UserRepository.container_name,
)


def editable_repository(kind: DocumentKind, database: DatabaseProxy) -> EditableRepository:
    """Build the repository that stores documents of ``kind``."""
    return EDITABLE_REPOSITORIES[kind](database)


__all__ = [
    "CONTAINER_NAMES",
    "EDITABLE_REPOSITORIES",
    "BaseRepository",
    "EditableRepository",
    "HandbookSectionRepository",
    "MemorandumRepository",
    "PolicySectionRepository",
    "Snapshot",
    "UserRepository",
    "editable_repository",
]
