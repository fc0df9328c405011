"""Memorandum model."""

from __future__ import annotations

from pydantic import Field

from council_portal.models.editable import EditableDocument


class Memorandum(EditableDocument):
    title: str
    year: int = Field(ge=1900, le=9999)
    file_name: str = ""
    file_url: str | None = None
    pdf_content: str = ""
