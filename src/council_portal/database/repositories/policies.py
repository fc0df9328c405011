"""Repository for the policy_sections container (partitioned by /id)."""

from __future__ import annotations

from council_portal.database.repositories.editable import EditableRepository
from council_portal.models.policy import PolicySection


class PolicySectionRepository(EditableRepository[PolicySection]):
    container_name = "policy_sections"
    model_class = PolicySection
