"""Edit coordinator: priority leases plus optimistic version checks.

Only one president at a time may hold the priority lease on a document, and a
save succeeds only for the holder and only against the version they loaded.
A successful save releases the lease. Abandoned leases are reclaimed by
``expire_stale_leases`` once they are older than the TTL; acquisition time is
never renewed, so a slow editor can lose the lease mid-edit.

Every mutation is a read followed by an ETag-conditional replace. When the
replace loses a race (HTTP 412) the whole decision is re-evaluated against the
fresh document, so two near-simultaneous acquires can never both win.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from council_portal.exceptions import (
    ConcurrentUpdateError,
    DocumentNotFoundError,
    NoEditPriorityError,
    VersionConflictError,
)
from council_portal.models.base import utcnow
from council_portal.models.editable import DocumentStatus, EditableDocument

if TYPE_CHECKING:
    from collections.abc import Callable

    from council_portal.database.repositories.base import Snapshot
    from council_portal.database.repositories.editable import EditableRepository
    from council_portal.database.repositories.users import UserRepository

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=EditableDocument)

DEFAULT_LEASE_TTL = timedelta(minutes=10)
DEFAULT_MAX_ATTEMPTS = 3
UNKNOWN_HOLDER = "Unknown"


@dataclass(frozen=True)
class LeaseResult:
    """Outcome of an acquire call; a denial is a normal result, not an error."""

    granted: bool
    holder_id: str | None = None
    holder_name: str | None = None
    held_since: datetime | None = None


class EditCoordinator(Generic[E]):
    """Coordinates concurrent edits to the documents of one container."""

    def __init__(
        self,
        documents: EditableRepository[E],
        users: UserRepository | None = None,
        *,
        ttl: timedelta = DEFAULT_LEASE_TTL,
        clock: Callable[[], datetime] = utcnow,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if ttl <= timedelta(0):
            raise ValueError("ttl must be positive")
        self._documents = documents
        self._users = users
        self._ttl = ttl
        self._clock = clock
        self._max_attempts = max_attempts

    @property
    def kind(self) -> str:
        return self._documents.container_name

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    async def create_document(self, user_id: str, fields: dict[str, Any]) -> E:
        """Create a document at version 1 with no lease."""
        document = self._documents.model_class.create(user_id, fields)
        now = self._clock()
        document.created_at = now
        document.updated_at = now
        await self._documents.create(document)
        logger.info("Document created: %s/%s by %s", self.kind, document.id, user_id)
        return document

    async def get_document(self, document_id: str) -> E:
        snapshot = await self._load(document_id)
        return snapshot.document

    async def list_documents(self) -> list[E]:
        return await self._documents.list_all()

    async def list_leased(self) -> list[E]:
        return await self._documents.list_leased()

    async def acquire_lease(self, document_id: str, user_id: str) -> LeaseResult:
        """Grant the lease to ``user_id`` if free, or report who holds it."""
        for _ in range(self._max_attempts):
            snapshot = await self._load(document_id)
            document = snapshot.document

            if document.is_held_by(user_id):
                # Same holder asking again: the original start time stands.
                return LeaseResult(
                    granted=True,
                    holder_id=user_id,
                    held_since=document.priority_edit_started_at,
                )

            if document.is_leased:
                holder_id = document.priority_editor
                logger.info(
                    "Lease denied: %s/%s requested by %s, held by %s",
                    self.kind,
                    document_id,
                    user_id,
                    holder_id,
                )
                return LeaseResult(
                    granted=False,
                    holder_id=holder_id,
                    holder_name=await self._holder_name(holder_id),
                    held_since=document.priority_edit_started_at,
                )

            now = self._clock()
            document.grant_lease(user_id, now)
            if await self._documents.replace_if_unchanged(document, snapshot.etag):
                logger.info("Lease granted: %s/%s to %s", self.kind, document_id, user_id)
                return LeaseResult(granted=True, holder_id=user_id, held_since=now)
            self._log_retry("acquire", document_id)

        raise ConcurrentUpdateError(document_id, self._max_attempts)

    async def release_lease(self, document_id: str, user_id: str) -> None:
        """Clear the lease if ``user_id`` holds it; otherwise do nothing."""
        for _ in range(self._max_attempts):
            snapshot = await self._load(document_id)
            document = snapshot.document
            if not document.is_held_by(user_id):
                return

            document.clear_lease()
            if await self._documents.replace_if_unchanged(document, snapshot.etag):
                logger.info("Lease released: %s/%s by %s", self.kind, document_id, user_id)
                return
            self._log_retry("release", document_id)

        raise ConcurrentUpdateError(document_id, self._max_attempts)

    async def save_content(
        self,
        document_id: str,
        user_id: str,
        expected_version: int,
        fields: dict[str, Any],
    ) -> E:
        """Apply ``fields`` for the lease holder and release the lease.

        Raises:
            DocumentNotFoundError: No active document with ``document_id``.
            NoEditPriorityError: ``user_id`` does not hold the lease.
            VersionConflictError: ``expected_version`` is stale.
            InvalidContentError: ``fields`` do not fit the document kind.
        """
        for _ in range(self._max_attempts):
            snapshot = await self._load(document_id)
            document = snapshot.document

            if not document.is_held_by(user_id):
                holder_id = document.priority_editor
                logger.info(
                    "Save rejected: %s/%s by %s without priority (holder=%s)",
                    self.kind,
                    document_id,
                    user_id,
                    holder_id,
                )
                raise NoEditPriorityError(
                    document_id,
                    holder_id=holder_id,
                    holder_name=await self._holder_name(holder_id) if holder_id else None,
                    held_since=document.priority_edit_started_at,
                )

            if document.version != expected_version:
                logger.warning(
                    "Version conflict: %s/%s expected=%d current=%d",
                    self.kind,
                    document_id,
                    expected_version,
                    document.version,
                )
                raise VersionConflictError(
                    document_id, expected=expected_version, current=document.version
                )

            now = self._clock()
            updated = document.with_content(fields)
            updated.status = DocumentStatus.DRAFT
            updated.version = document.version + 1
            updated.edited_by = user_id
            updated.edited_at = now
            updated.updated_at = now
            updated.clear_lease()

            if await self._documents.replace_if_unchanged(updated, snapshot.etag):
                logger.info(
                    "Document saved: %s/%s by %s (version %d)",
                    self.kind,
                    document_id,
                    user_id,
                    updated.version,
                )
                return updated
            self._log_retry("save", document_id)

        raise ConcurrentUpdateError(document_id, self._max_attempts)

    async def expire_stale_leases(self) -> int:
        """Clear every lease acquired more than ``ttl`` ago; return how many were cleared.

        Each candidate is re-checked and written back on the ETag it was
        scanned at, so a lease re-acquired after the scan is left alone.
        """
        cutoff = self._clock() - self._ttl
        cleared = 0
        for snapshot in await self._documents.list_stale_leases(cutoff):
            document = snapshot.document
            if not document.lease_started_before(cutoff):
                continue
            holder_id = document.priority_editor
            document.clear_lease()
            if await self._documents.replace_if_unchanged(document, snapshot.etag):
                cleared += 1
                logger.info(
                    "Lease expired: %s/%s (holder=%s)", self.kind, document.id, holder_id
                )
            else:
                logger.info(
                    "Lease expiry skipped, document changed: %s/%s", self.kind, document.id
                )
        if cleared:
            logger.info("Expired %d stale lease(s) in %s", cleared, self.kind)
        return cleared

    async def _load(self, document_id: str) -> Snapshot[E]:
        snapshot = await self._documents.read_snapshot(document_id)
        if snapshot is None:
            raise DocumentNotFoundError(self.kind, document_id)
        return snapshot

    async def _holder_name(self, holder_id: str | None) -> str:
        if holder_id is None or self._users is None:
            return UNKNOWN_HOLDER
        return await self._users.display_name(holder_id) or UNKNOWN_HOLDER

    def _log_retry(self, operation: str, document_id: str) -> None:
        logger.warning(
            "Concurrent write on %s/%s during %s, re-evaluating", self.kind, document_id, operation
        )
