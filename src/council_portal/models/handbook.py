"""Handbook section model."""

from __future__ import annotations

from council_portal.models.editable import EditableDocument


class HandbookSection(EditableDocument):
    """One section of the student handbook, backed by an uploaded PDF."""

    title: str
    slug: str = ""
    description: str = ""
    order: int = 0
    file_name: str = ""
    file_url: str | None = None
    pdf_content: str = ""
    published: bool = False
    archived: bool = False
