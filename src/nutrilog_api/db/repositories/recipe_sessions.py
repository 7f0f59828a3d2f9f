"""Repository for recipe assistant conversations."""

from datetime import datetime, timezone
from typing import Any

from .base import BaseRepository, to_object_id


class RecipeSessionRepository(BaseRepository):
    """
    Recipe conversations and their message history.

    Each session holds its messages and the names of recipes already
    suggested, both as append-only arrays without a size cap.

    Document format:
        - meal_type: "Breakfast" | "Lunch" | "Dinner"
        - messages[]: {role, content, timestamp}
        - previous_recipes[]: recipe names, in suggestion order
    """

    async def create(self, meal_type: str) -> str:
        """
        Start a new session.

        Args:
            meal_type: Meal the conversation plans for

        Returns:
            Created session ID
        """
        now = datetime.now(timezone.utc)
        return await self.insert_one({
            "meal_type": meal_type,
            "messages": [],
            "previous_recipes": [],
            "created_at": now,
            "updated_at": now,
        })

    async def get_session(self, session_id: str) -> dict[str, Any] | None:
        """Raw session document, or None if missing."""
        oid = to_object_id(session_id)
        if oid is None:
            return None
        return await self.collection.find_one({"_id": oid})

    async def add_message(
        self,
        session_id: str,
        content: str,
        role: str = "user",
        recipe_name: str | None = None,
    ) -> bool:
        """
        Append a message, and optionally the recipe name it introduced.

        Args:
            session_id: Session ObjectId as string
            content: Message text
            role: 'user' or 'assistant'
            recipe_name: Name to add to the no-repeat list

        Returns:
            True if the session exists and was updated
        """
        oid = to_object_id(session_id)
        if oid is None:
            return False

        now = datetime.now(timezone.utc)
        push: dict[str, Any] = {
            "messages": {"role": role, "content": content, "timestamp": now},
        }
        if recipe_name:
            push["previous_recipes"] = recipe_name

        result = await self.collection.update_one(
            {"_id": oid},
            {"$push": push, "$set": {"updated_at": now}},
        )
        return result.matched_count > 0

    async def delete_session(self, session_id: str) -> bool:
        return await self.delete_one(session_id)
