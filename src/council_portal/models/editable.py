"""Editable document model: the fields the edit coordinator owns."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any, Self

from pydantic import Field, ValidationError, model_validator

from council_portal.exceptions import InvalidContentError
from council_portal.models.base import DocumentBase, Timestamp


class DocumentKind(StrEnum):
    """URL segment for each editable document collection."""

    HANDBOOK = "handbook"
    MEMORANDUMS = "memorandums"
    POLICIES = "policies"


class DocumentStatus(StrEnum):
    DRAFT = "draft"
    APPROVED = "approved"
    REJECTED = "rejected"


# Fields only the coordinator (or the store) may write.
RESERVED_FIELDS = frozenset(
    {
        "id",
        "version",
        "status",
        "priority_editor",
        "priority_edit_started_at",
        "created_by",
        "created_at",
        "updated_at",
        "deleted_at",
        "edited_by",
        "edited_at",
    }
)


class EditableDocument(DocumentBase):
    """A document that presidents edit under a priority lease."""

    version: int = Field(default=1, ge=1)
    status: DocumentStatus = DocumentStatus.DRAFT
    created_by: str
    edited_by: str | None = None
    edited_at: Timestamp | None = None
    priority_editor: str | None = None
    priority_edit_started_at: Timestamp | None = None

    @model_validator(mode="after")
    def _lease_fields_set_together(self) -> Self:
        if (self.priority_editor is None) != (self.priority_edit_started_at is None):
            msg = "priority_editor and priority_edit_started_at must be set together"
            raise ValueError(msg)
        return self

    @property
    def is_leased(self) -> bool:
        return self.priority_editor is not None

    def is_held_by(self, user_id: str) -> bool:
        return self.priority_editor is not None and self.priority_editor == user_id

    def lease_started_before(self, cutoff: datetime) -> bool:
        """Return True when a lease exists and was acquired before ``cutoff``."""
        return self.priority_edit_started_at is not None and self.priority_edit_started_at < cutoff

    def grant_lease(self, user_id: str, now: datetime) -> None:
        self.priority_editor = user_id
        self.priority_edit_started_at = now

    def clear_lease(self) -> None:
        self.priority_editor = None
        self.priority_edit_started_at = None

    @classmethod
    def content_fields(cls) -> frozenset[str]:
        return frozenset(cls.model_fields) - RESERVED_FIELDS

    @classmethod
    def check_content_keys(cls, fields: dict[str, Any]) -> None:
        """Reject payloads that touch reserved fields or fields this kind lacks."""
        reserved = sorted(RESERVED_FIELDS & fields.keys())
        if reserved:
            raise InvalidContentError(f"Fields cannot be edited directly: {', '.join(reserved)}")
        unknown = sorted(fields.keys() - cls.content_fields())
        if unknown:
            raise InvalidContentError(f"Unknown fields for {cls.__name__}: {', '.join(unknown)}")

    @classmethod
    def create(cls, created_by: str, fields: dict[str, Any]) -> Self:
        """Build a fresh document at version 1 with no lease."""
        cls.check_content_keys(fields)
        try:
            return cls.model_validate({**fields, "created_by": created_by})
        except ValidationError as exc:
            raise InvalidContentError(
                f"Invalid {cls.__name__} content",
                exc.errors(include_url=False, include_context=False),
            ) from exc

    def with_content(self, fields: dict[str, Any]) -> Self:
        """Return a validated copy with ``fields`` applied; self is left untouched."""
        self.check_content_keys(fields)
        try:
            return type(self).model_validate({**self.model_dump(), **fields})
        except ValidationError as exc:
            raise InvalidContentError(
                f"Invalid {type(self).__name__} content",
                exc.errors(include_url=False, include_context=False),
            ) from exc
