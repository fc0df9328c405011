"""Data models for Cosmos DB document types."""

from council_portal.models.base import DocumentBase
from council_portal.models.editable import DocumentKind, DocumentStatus, EditableDocument
from council_portal.models.handbook import HandbookSection
from council_portal.models.memorandum import Memorandum
from council_portal.models.policy import PolicySection
from council_portal.models.user import User

__all__ = [
    "DocumentBase",
    "DocumentKind",
    "DocumentStatus",
    "EditableDocument",
    "HandbookSection",
    "Memorandum",
    "PolicySection",
    "User",
]
