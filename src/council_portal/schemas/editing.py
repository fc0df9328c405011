"""Request and response bodies for the editing API (camelCase on the wire)."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel, to_snake

from council_portal.models.base import Timestamp
from council_portal.models.editable import EditableDocument


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserRequest(CamelModel):
    user_id: str = Field(min_length=1)


class CreateDocumentRequest(UserRequest):
    fields: dict[str, Any] = Field(default_factory=dict)


class SaveRequest(UserRequest):
    version: int
    fields: dict[str, Any] = Field(default_factory=dict)


class PriorityResponse(CamelModel):
    message: str
    has_priority: bool
    priority_editor: str | None = None
    priority_edit_started_at: Timestamp | None = None


class DocumentResponse(CamelModel):
    message: str | None = None
    document: dict[str, Any]


class DocumentListResponse(CamelModel):
    documents: list[dict[str, Any]]


class ClearPriorityResponse(CamelModel):
    ok: bool = True
    message: str = "Priority cleared"


def fields_from_wire(fields: dict[str, Any]) -> dict[str, Any]:
    """Accept camelCase or snake_case content keys from the client."""
    return {to_snake(key): value for key, value in fields.items()}


def document_to_wire(document: EditableDocument) -> dict[str, Any]:
    return {to_camel(key): value for key, value in document.model_dump(mode="json").items()}
