"""Pydantic models for recipe assistant sessions."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class RecipeMealType(str, Enum):
    """Meals the recipe assistant plans for."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"


class RecipeSessionCreate(BaseModel):
    """Request model for starting a recipe conversation."""

    meal_type: RecipeMealType


class RecipeMessageRequest(BaseModel):
    """Follow-up question inside a session."""

    message: str = Field(..., min_length=1)


class RecipeMessage(BaseModel):
    role: str  # "user" or "assistant"
    content: str
    timestamp: datetime | None = None


class RecipeSession(BaseModel):
    """Recipe conversation with its full, uncapped history."""

    session_id: str
    meal_type: RecipeMealType
    messages: list[RecipeMessage] = Field(default_factory=list)
    previous_recipes: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_mongo(cls, doc: dict) -> "RecipeSession":
        """Create from a MongoDB document."""
        return cls(
            session_id=str(doc.get("_id", doc.get("session_id", ""))),
            meal_type=doc["meal_type"],
            messages=[
                RecipeMessage(
                    role=m.get("role", "assistant"),
                    content=m.get("content", ""),
                    timestamp=m.get("timestamp"),
                )
                for m in doc.get("messages", [])
                if m.get("content")
            ],
            previous_recipes=doc.get("previous_recipes", []),
            created_at=doc["created_at"],
            updated_at=doc.get("updated_at", doc["created_at"]),
        )
