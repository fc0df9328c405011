"""Repository for the handbook_sections container (partitioned by /id)."""

from __future__ import annotations

from council_portal.database.repositories.editable import EditableRepository
from council_portal.models.handbook import HandbookSection


class HandbookSectionRepository(EditableRepository[HandbookSection]):
    container_name = "handbook_sections"
    model_class = HandbookSection
