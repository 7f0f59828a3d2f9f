"""Pydantic models for API schemas."""

from .auth import AccessResponse, LoginRequest
from .meal import (
    MEAL_CATEGORIES,
    CalendarDay,
    CategoryGroup,
    DashboardView,
    FoodEditRequest,
    FoodItem,
    FoodOperation,
    Meal,
    MealCategory,
    MealCreate,
    MealCreateRequest,
    MealDraft,
    MealUpdate,
)
from .recipe import (
    RecipeMealType,
    RecipeMessage,
    RecipeMessageRequest,
    RecipeSession,
    RecipeSessionCreate,
)
from .settings import UserSettings
from .weight import (
    ChartPoint,
    TimeRange,
    WeightEntry,
    WeightEntryCreate,
    WeightOverview,
    WeightProgress,
)

__all__ = [
    # Auth
    "AccessResponse",
    "LoginRequest",
    # Meals
    "MEAL_CATEGORIES",
    "CalendarDay",
    "CategoryGroup",
    "DashboardView",
    "FoodEditRequest",
    "FoodItem",
    "FoodOperation",
    "Meal",
    "MealCategory",
    "MealCreate",
    "MealCreateRequest",
    "MealDraft",
    "MealUpdate",
    # Recipes
    "RecipeMealType",
    "RecipeMessage",
    "RecipeMessageRequest",
    "RecipeSession",
    "RecipeSessionCreate",
    # Settings
    "UserSettings",
    # Weight
    "ChartPoint",
    "TimeRange",
    "WeightEntry",
    "WeightEntryCreate",
    "WeightOverview",
    "WeightProgress",
]
