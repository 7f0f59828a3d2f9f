"""FastAPI dependency injection factories."""

from typing import Annotated

from fastapi import Cookie, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from nutrilog_api.core.access import ACCESS_COOKIE, AccessLevel, check_access, parse_access_level
from nutrilog_api.core.config import Settings, get_settings
from nutrilog_api.db.mongo import MongoDB
from nutrilog_api.db.unit_of_work import UnitOfWork
from nutrilog_api.services.meals import MealService
from nutrilog_api.services.recipes import RecipeService
from nutrilog_api.services.settings import SettingsService
from nutrilog_api.services.weight import WeightService


# Type aliases for cleaner route signatures
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_database() -> AsyncIOMotorDatabase:
    """
    Get the MongoDB database instance.

    Returns:
        Motor database instance
    """
    settings = get_settings()
    return MongoDB.get_database(settings.db_name)


def get_uow(db: AsyncIOMotorDatabase = Depends(get_database)) -> UnitOfWork:
    """
    Get Unit of Work instance.

    Args:
        db: Injected database instance

    Returns:
        UnitOfWork instance
    """
    return UnitOfWork(db)


# Type alias for UoW dependency
UoWDep = Annotated[UnitOfWork, Depends(get_uow)]


# ============================================================================
# Access gate
# ============================================================================


def get_access_level(
    access_level: Annotated[str | None, Cookie(alias=ACCESS_COOKIE)] = None,
) -> AccessLevel:
    """Access level carried by the request's cookie."""
    return parse_access_level(access_level)


AccessLevelDep = Annotated[AccessLevel, Depends(get_access_level)]


def require_access(required: AccessLevel):
    """
    Build a dependency that rejects requests below ``required``.

    Usage:
        @router.get("", dependencies=[Depends(require_access(AccessLevel.FULL))])
    """

    def dependency(current: AccessLevelDep) -> AccessLevel:
        check_access(current, required)
        return current

    return dependency


RequireBasic = Depends(require_access(AccessLevel.BASIC))
RequireFull = Depends(require_access(AccessLevel.FULL))


# ============================================================================
# Services
# ============================================================================


def get_meal_service(uow: UnitOfWork = Depends(get_uow)) -> MealService:
    """
    Get MealService instance.

    The food extraction provider is resolved on first analysis, so routes
    that never analyze photos work without an LLM key.
    """
    return MealService(uow)


def get_weight_service(uow: UnitOfWork = Depends(get_uow)) -> WeightService:
    return WeightService(uow)


def get_settings_service(uow: UnitOfWork = Depends(get_uow)) -> SettingsService:
    return SettingsService(uow)


def get_recipe_service(uow: UnitOfWork = Depends(get_uow)) -> RecipeService:
    """
    Get RecipeService instance.

    Args:
        uow: Injected Unit of Work

    Returns:
        RecipeService instance with a lazily built recipe agent
    """
    return RecipeService(uow)


# Type aliases for service dependencies
MealServiceDep = Annotated[MealService, Depends(get_meal_service)]
WeightServiceDep = Annotated[WeightService, Depends(get_weight_service)]
SettingsServiceDep = Annotated[SettingsService, Depends(get_settings_service)]
RecipeServiceDep = Annotated[RecipeService, Depends(get_recipe_service)]
