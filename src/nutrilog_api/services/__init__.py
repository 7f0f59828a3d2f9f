"""Business logic services."""

from .meals import MealService
from .recipes import RecipeService
from .settings import SettingsService
from .weight import WeightService

__all__ = [
    "MealService",
    "RecipeService",
    "SettingsService",
    "WeightService",
]
