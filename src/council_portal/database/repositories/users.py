"""Repository for the users container (partitioned by /id)."""

from __future__ import annotations

from council_portal.database.repositories.base import BaseRepository
from council_portal.models.user import User


class UserRepository(BaseRepository[User]):
    container_name = "users"
    model_class = User

    async def display_name(self, user_id: str) -> str | None:
        """Return the user's name, or None when the user is unknown."""
        user = await self.get(user_id, user_id)
        if user is None or not user.name:
            return None
        return user.name
