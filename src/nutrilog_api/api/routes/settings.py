"""User settings API routes."""

from fastapi import APIRouter

from nutrilog_api.api.dependencies import RequireFull, SettingsServiceDep
from nutrilog_api.models.settings import UserSettings

router = APIRouter(dependencies=[RequireFull])


@router.get("", response_model=UserSettings)
async def get_user_settings(service: SettingsServiceDep):
    """Get the saved settings, or the defaults if none were saved yet."""
    return await service.get()


@router.put("", response_model=UserSettings)
async def save_user_settings(settings: UserSettings, service: SettingsServiceDep):
    """
    Replace the settings document.

    - **protein_per_meal** / **fat_per_meal** / **carbs_per_meal**: Macro
      targets in grams the recipe assistant plans against
    - **dietary_preferences**: none, vegetarian, vegan, pescatarian, keto,
      paleo or kosher
    """
    return await service.save(settings)
