"""Pydantic models for meals and their food items."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class MealCategory(str, Enum):
    """The five fixed daily meal slots, in display order."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK_1 = "Snack 1"
    SNACK_2 = "Snack 2"


MEAL_CATEGORIES: tuple[str, ...] = tuple(c.value for c in MealCategory)

FoodField = Literal["name", "quantity", "notes"]


class FoodItem(BaseModel):
    """One named food entry in a meal."""

    name: str = ""
    quantity: str = ""
    notes: str = ""


class MealBase(BaseModel):
    name: str
    foods: list[FoodItem] = Field(default_factory=list)
    image: str | None = Field(None, description="Inline data URL of the meal photo")
    timestamp: int = Field(..., description="Epoch milliseconds")
    category: str


class MealCreate(MealBase):
    """Meal fields as written on first save."""


class Meal(MealBase):
    """Stored meal record."""

    id: str


class MealUpdate(BaseModel):
    """Editable meal fields; anything left as None is not touched."""

    foods: list[FoodItem] | None = None
    image: str | None = None


# ============================================================================
# Request / Response Models
# ============================================================================


class MealCreateRequest(BaseModel):
    """Body of ``POST /meals``."""

    category: MealCategory
    foods: list[FoodItem] = Field(default_factory=list)
    image: str | None = Field(None, description="Normalized data URL from /meals/analyze")
    timestamp: int | None = Field(None, description="Epoch ms, defaults to now")


class FoodOperation(BaseModel):
    """A single edit applied to a meal's food list."""

    op: Literal["add", "update", "remove"]
    index: int | None = None
    field: FoodField | None = None
    value: str = ""


class FoodEditRequest(BaseModel):
    """Body of ``PATCH /meals/{id}/foods``."""

    operations: list[FoodOperation]


class MealDraft(BaseModel):
    """Result of analysing an uploaded photo, ready for review."""

    image: str
    width: int
    height: int
    foods: list[FoodItem] = Field(default_factory=list)
    error: str | None = Field(None, description="Notice when analysis failed")


class CategoryGroup(BaseModel):
    title: str
    meals: list[Meal] = Field(default_factory=list)


class DashboardView(BaseModel):
    """One day of meals grouped into the fixed categories."""

    date: str
    categories: list[CategoryGroup]
    unclassified_count: int = 0


class CalendarDay(BaseModel):
    """One day of meals as a flat list."""

    date: str
    meals: list[Meal]
