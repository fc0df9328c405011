"""User document model (read-only here; used to name lease holders)."""

from __future__ import annotations

from council_portal.models.base import DocumentBase


class User(DocumentBase):
    name: str = ""
    email: str = ""
    role: str = "student"
