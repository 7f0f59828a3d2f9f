"""Unit of Work pattern for managing repository access."""

from motor.motor_asyncio import AsyncIOMotorDatabase

from .mongo import MEALS, RECIPE_SESSIONS, SETTINGS, WEIGHT_ENTRIES
from .repositories.meals import MealRepository
from .repositories.recipe_sessions import RecipeSessionRepository
from .repositories.settings import SettingsRepository
from .repositories.weight_entries import WeightEntryRepository


class UnitOfWork:
    """
    Unit of Work pattern implementation.

    Groups repository access and provides a single injection point for services.

    Usage:
        uow = UnitOfWork(db)
        meals = await uow.meals.list_by_range(start_ms, end_ms)
        settings = await uow.settings.get()
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize Unit of Work with database instance.

        Args:
            db: Motor database instance
        """
        self._db = db
        self._meals: MealRepository | None = None
        self._weight_entries: WeightEntryRepository | None = None
        self._settings: SettingsRepository | None = None
        self._recipe_sessions: RecipeSessionRepository | None = None

    @property
    def meals(self) -> MealRepository:
        """Meal repository (lazy loaded)."""
        if self._meals is None:
            self._meals = MealRepository(self._db[MEALS])
        return self._meals

    @property
    def weight_entries(self) -> WeightEntryRepository:
        """Weight entry repository (lazy loaded)."""
        if self._weight_entries is None:
            self._weight_entries = WeightEntryRepository(self._db[WEIGHT_ENTRIES])
        return self._weight_entries

    @property
    def settings(self) -> SettingsRepository:
        """Settings repository (lazy loaded)."""
        if self._settings is None:
            self._settings = SettingsRepository(self._db[SETTINGS])
        return self._settings

    @property
    def recipe_sessions(self) -> RecipeSessionRepository:
        """Recipe session repository (lazy loaded)."""
        if self._recipe_sessions is None:
            self._recipe_sessions = RecipeSessionRepository(self._db[RECIPE_SESSIONS])
        return self._recipe_sessions
