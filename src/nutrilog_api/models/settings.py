"""User settings document (macro targets and preferences)."""

from typing import Literal

from pydantic import BaseModel

DietaryPreference = Literal[
    "none", "vegetarian", "vegan", "pescatarian", "keto", "paleo", "kosher"
]


class UserSettings(BaseModel):
    """
    Singleton settings record.

    Values stay as the strings the user typed into the settings form; the
    recipe assistant interpolates them into its prompt as-is.
    """

    height: str = ""
    weight: str = ""
    calorie_goal: str = ""
    dietary_preferences: DietaryPreference = "none"
    measurement_unit: Literal["metric", "imperial"] = "metric"
    meals_per_day: str = "3"
    protein_per_meal: str = ""
    fat_per_meal: str = ""
    carbs_per_meal: str = ""
    snacks_per_day: str = "2"
    protein_per_snack: str = ""
    fat_per_snack: str = ""
    carbs_per_snack: str = ""
