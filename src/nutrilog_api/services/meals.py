"""Meal logging service.

Covers the whole meal flow: photo normalization and analysis, saving,
editing, deleting, and the per-day dashboard and calendar views.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from zoneinfo import ZoneInfo

from pymongo.errors import PyMongoError

from nutrilog_api.core.config import Settings, get_settings
from nutrilog_api.core.exceptions import ExtractionError, PersistenceError, ValidationError
from nutrilog_api.db.unit_of_work import UnitOfWork
from nutrilog_api.models.meal import (
    CalendarDay,
    DashboardView,
    FoodOperation,
    Meal,
    MealCreateRequest,
    MealDraft,
    MealUpdate,
)
from nutrilog_api.services.categories import group_meals
from nutrilog_api.services.food_recognition import (
    FoodExtractionService,
    get_food_extraction_service,
)
from nutrilog_api.services.image_normalizer import ensure_bounded, normalize_image
from nutrilog_api.services.meal_editor import MealComposer, MealEditor
from nutrilog_api.utils.dates import day_bounds_ms, now_ms

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(notice: str) -> Iterator[None]:
    """Turn driver failures inside the block into a PersistenceError with ``notice``."""
    try:
        yield
    except PyMongoError as e:
        logger.error(f"{notice}: {e}")
        raise PersistenceError(notice, details={"reason": str(e)}) from e


class MealService:
    """
    Service for the meal logging workflow.

    Every public method is one user action; failures surface as
    ``APIError`` subclasses carrying a short notice for the client.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        extractor: FoodExtractionService | None = None,
        settings: Settings | None = None,
    ):
        """
        Initialize meal service.

        Args:
            uow: Unit of Work instance
            extractor: Food extraction provider (resolved lazily if not provided)
            settings: Application settings (uses default if not provided)
        """
        self.uow = uow
        self._extractor = extractor
        self.settings = settings or get_settings()
        self.tz = ZoneInfo(self.settings.timezone)

    def _get_extractor(self) -> FoodExtractionService:
        if self._extractor is None:
            self._extractor = get_food_extraction_service()
        return self._extractor

    # ------------------------------------------------------------------
    # Photo analysis
    # ------------------------------------------------------------------

    async def analyze_image(self, data: bytes) -> MealDraft:
        """
        Normalize an uploaded photo and draft its food list.

        A failed analysis is not fatal: the draft comes back with the
        normalized image, no foods, and an ``error`` notice so the user can
        still enter foods by hand.

        Raises:
            ValidationError: If the upload is empty or too large
            DecodeError: If the upload is not an image
        """
        if not data:
            raise ValidationError("No image uploaded")
        if len(data) > self.settings.max_upload_bytes:
            raise ValidationError(
                f"Image exceeds maximum size of {self.settings.max_upload_mb} MB",
                details={"size": len(data), "max_size": self.settings.max_upload_bytes},
            )

        image = normalize_image(
            data,
            max_dimension=self.settings.image_max_dimension,
            quality=self.settings.image_quality,
        )

        composer = MealComposer.new(category="", timestamp=now_ms())
        composer.select_image(image.data_url)

        error = None
        try:
            foods = await self._get_extractor().extract(image.data_url)
            composer.apply_extraction(foods)
        except ExtractionError as e:
            logger.warning(f"Image analysis failed, returning empty draft: {e.message}")
            error = e.message

        composer.proceed()
        return MealDraft(
            image=composer.image,
            width=image.width,
            height=image.height,
            foods=composer.editor.foods,
            error=error,
        )

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def create_meal(self, request: MealCreateRequest) -> Meal:
        """
        Save a new meal.

        Raises:
            ValidationError: If no image was selected
            DecodeError: If the image is not a readable data URL
            PersistenceError: If the write fails
        """
        composer = MealComposer.new(
            category=request.category.value,
            timestamp=request.timestamp if request.timestamp is not None else now_ms(),
        )
        if request.image:
            composer.select_image(self._bounded(request.image))
        composer.proceed()
        composer.apply_extraction(request.foods)

        with store_errors("Failed to save meal"):
            meal = await self.uow.meals.create(composer.build_create(self.tz))
        composer.mark_saved()
        return meal

    async def get_meal(self, meal_id: str) -> Meal:
        with store_errors("Failed to load meal"):
            return await self.uow.meals.get(meal_id)

    async def list_meals(self, start_ms: int, end_ms: int) -> list[Meal]:
        if start_ms > end_ms:
            raise ValidationError("start must not be after end", details={"start": start_ms, "end": end_ms})
        with store_errors("Failed to load meals"):
            return await self.uow.meals.list_by_range(start_ms, end_ms)

    async def update_meal(self, meal_id: str, changes: MealUpdate) -> Meal:
        """
        Replace a meal's foods and/or image.

        Raises:
            NotFoundError: If the meal does not exist
            PersistenceError: If the write fails
        """
        if changes.image is not None:
            changes = changes.model_copy(update={"image": self._bounded(changes.image)})

        with store_errors("Failed to update meal"):
            await self.uow.meals.update(meal_id, changes)
            return await self.uow.meals.get(meal_id)

    async def edit_foods(self, meal_id: str, operations: list[FoodOperation]) -> Meal:
        """
        Apply a batch of add/update/remove edits to a meal's food list.

        Operations run in order against the list as it stands after the
        previous one. The batch is validated in full before anything is
        written.

        Raises:
            NotFoundError: If the meal does not exist
            ValidationError: If an operation references a missing item
        """
        with store_errors("Failed to load meal"):
            meal = await self.uow.meals.get(meal_id)

        composer = MealComposer.for_existing(meal)
        for position, operation in enumerate(operations):
            self._apply(composer.editor, operation, position)

        with store_errors("Failed to update meal"):
            await self.uow.meals.update(meal_id, composer.build_update())
        composer.mark_saved()
        return meal.model_copy(update={"foods": composer.editor.foods})

    async def delete_meal(self, meal_id: str) -> None:
        with store_errors("Failed to delete meal"):
            await self.uow.meals.delete(meal_id)

    # ------------------------------------------------------------------
    # Day views
    # ------------------------------------------------------------------

    async def dashboard(self, day: date) -> DashboardView:
        """The day's meals grouped into the five categories."""
        start_ms, end_ms = day_bounds_ms(day, self.tz)
        with store_errors("Failed to load meals"):
            meals = await self.uow.meals.list_by_range(start_ms, end_ms)

        grouping = group_meals(meals)
        return DashboardView(
            date=day.isoformat(),
            categories=grouping.as_groups(),
            unclassified_count=grouping.unclassified_count,
        )

    async def calendar(self, day: date) -> CalendarDay:
        """All of the day's meals in time order, whatever their category."""
        start_ms, end_ms = day_bounds_ms(day, self.tz)
        with store_errors("Failed to load meals"):
            meals = await self.uow.meals.list_by_range(start_ms, end_ms)
        return CalendarDay(date=day.isoformat(), meals=meals)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _bounded(self, image: str) -> str:
        return ensure_bounded(
            image,
            max_dimension=self.settings.image_max_dimension,
            quality=self.settings.image_quality,
        )

    @staticmethod
    def _apply(editor: MealEditor, operation: FoodOperation, position: int) -> None:
        if operation.op == "add":
            editor.add_blank()
            return

        if operation.index is None or not 0 <= operation.index < len(editor):
            raise ValidationError(
                f"Operation {position} refers to food item {operation.index}, "
                f"but the meal has {len(editor)}",
                details={"operation": position, "index": operation.index},
            )

        if operation.op == "remove":
            editor.remove(operation.index)
        else:
            if operation.field is None:
                raise ValidationError(
                    f"Operation {position} is an update without a field",
                    details={"operation": position},
                )
            editor.update(operation.index, operation.field, operation.value)
