"""Domain errors raised by the edit coordinator.

Each error carries the HTTP status it maps to and any extra fields the
frontend needs to render a useful message. Contention on ``acquire_lease`` is
not an error; only failed saves and lookups are.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from council_portal.timestamps import format_timestamp


class EditCoordinationError(Exception):
    """Base class for errors surfaced to the request layer."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def payload(self) -> dict[str, Any]:
        """Extra response fields merged alongside ``message``."""
        return {}


class DocumentNotFoundError(EditCoordinationError):
    status_code = 404

    def __init__(self, kind: str, document_id: str) -> None:
        super().__init__(f"{kind} document {document_id} not found")
        self.kind = kind
        self.document_id = document_id


class NoEditPriorityError(EditCoordinationError):
    """Save attempted by a user who does not hold the document's lease."""

    status_code = 403

    def __init__(
        self,
        document_id: str,
        *,
        holder_id: str | None,
        holder_name: str | None,
        held_since: datetime | None,
    ) -> None:
        super().__init__(
            "You do not have edit priority. Only the first user to click edit can save changes."
        )
        self.document_id = document_id
        self.holder_id = holder_id
        self.holder_name = holder_name
        self.held_since = held_since

    def payload(self) -> dict[str, Any]:
        return {
            "hasPriority": False,
            "priorityEditor": self.holder_name,
            "priorityEditStartedAt": (
                format_timestamp(self.held_since) if self.held_since is not None else None
            ),
        }


class VersionConflictError(EditCoordinationError):
    """Save attempted against a stale version of the document."""

    status_code = 409

    def __init__(self, document_id: str, *, expected: int, current: int) -> None:
        super().__init__("Document has been modified. Please refresh and try again.")
        self.document_id = document_id
        self.expected = expected
        self.current = current

    def payload(self) -> dict[str, Any]:
        return {"currentVersion": self.current}


class InvalidContentError(EditCoordinationError):
    status_code = 422

    def __init__(self, message: str, errors: list[Any] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []

    def payload(self) -> dict[str, Any]:
        return {"errors": self.errors}


class ConcurrentUpdateError(EditCoordinationError):
    """Conditional writes kept losing to concurrent writers; the caller may retry."""

    status_code = 503

    def __init__(self, document_id: str, attempts: int) -> None:
        super().__init__("Document is being modified concurrently. Please try again.")
        self.document_id = document_id
        self.attempts = attempts
