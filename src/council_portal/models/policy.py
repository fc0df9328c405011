"""Policy section model, grouped under a policy department."""

from __future__ import annotations

from council_portal.models.editable import EditableDocument


class PolicySection(EditableDocument):
    department_id: str
    title: str
    slug: str = ""
    description: str = ""
    file_name: str = ""
    file_url: str | None = None
    rejection_reason: str | None = None
    archived: bool = False
