"""Common fields and timestamp handling for Cosmos DB documents."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import uuid4

from pydantic import AfterValidator, BaseModel, Field, PlainSerializer

from council_portal.timestamps import as_utc, format_timestamp, utcnow

__all__ = ["DocumentBase", "Timestamp", "format_timestamp", "utcnow"]

Timestamp = Annotated[
    datetime,
    AfterValidator(as_utc),
    PlainSerializer(format_timestamp, return_type=str, when_used="json"),
]


class DocumentBase(BaseModel):
    """Fields shared by every container document."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    created_at: Timestamp = Field(default_factory=utcnow)
    updated_at: Timestamp = Field(default_factory=utcnow)
    deleted_at: Timestamp | None = None
