"""Repository for the memorandums container (partitioned by /id)."""

from __future__ import annotations

from council_portal.database.repositories.editable import EditableRepository
from council_portal.models.memorandum import Memorandum


class MemorandumRepository(EditableRepository[Memorandum]):
    container_name = "memorandums"
    model_class = Memorandum
