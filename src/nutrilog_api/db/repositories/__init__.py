"""Repository classes for database access."""

from .meals import MealRepository
from .recipe_sessions import RecipeSessionRepository
from .settings import SettingsRepository
from .weight_entries import WeightEntryRepository

__all__ = [
    "MealRepository",
    "RecipeSessionRepository",
    "SettingsRepository",
    "WeightEntryRepository",
]
