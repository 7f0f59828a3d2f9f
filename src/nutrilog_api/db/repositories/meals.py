"""Repository for the meals collection."""

import logging
from typing import Any

from pymongo import ASCENDING

from nutrilog_api.core.exceptions import NotFoundError
from nutrilog_api.models.meal import Meal, MealCreate, MealUpdate

from .base import BaseRepository

logger = logging.getLogger(__name__)


class MealRepository(BaseRepository[Meal]):
    """
    Persistence facade for meal records.

    Documents are stored as ``{name, foods, image, timestamp, category}``
    with Mongo's generated ``_id``. Both the dashboard and the calendar read
    through :meth:`list_by_range`.
    """

    model_class = Meal

    async def create(self, meal: MealCreate) -> Meal:
        """
        Persist a new meal.

        Args:
            meal: Meal fields without an id

        Returns:
            The stored record including its generated id
        """
        document = meal.model_dump()
        meal_id = await self.insert_one(document)
        logger.info(f"Created meal {meal_id} ({meal.category}, {len(meal.foods)} foods)")
        return Meal(id=meal_id, **document)

    async def get(self, meal_id: str) -> Meal:
        """
        Fetch one meal.

        Raises:
            NotFoundError: If no meal has this id
        """
        meal = await self.find_by_id(meal_id)
        if meal is None:
            raise NotFoundError("Meal", meal_id)
        return meal

    async def update(self, meal_id: str, changes: MealUpdate) -> None:
        """
        Merge the given fields into a stored meal.

        Fields left as None in ``changes`` keep their stored value.

        Raises:
            NotFoundError: If no meal has this id
        """
        fields: dict[str, Any] = changes.model_dump(exclude_none=True)
        if not fields:
            # Nothing to write; still confirm the target exists.
            await self.get(meal_id)
            return
        if not await self.update_one(meal_id, fields):
            raise NotFoundError("Meal", meal_id)
        logger.info(f"Updated meal {meal_id}: {sorted(fields)}")

    async def delete(self, meal_id: str) -> bool:
        """
        Remove a meal.

        Deleting an id that does not exist is a no-op.

        Returns:
            True if a document was removed
        """
        deleted = await self.delete_one(meal_id)
        if not deleted:
            logger.info(f"Delete of meal {meal_id} matched nothing")
        return deleted

    async def list_by_range(self, start_ms: int, end_ms: int) -> list[Meal]:
        """
        Meals whose timestamp falls in ``[start_ms, end_ms]``.

        Args:
            start_ms: Inclusive lower bound, epoch ms
            end_ms: Inclusive upper bound, epoch ms

        Returns:
            Meals ordered by ascending timestamp
        """
        return await self.find_many(
            {"timestamp": {"$gte": start_ms, "$lte": end_ms}},
            sort=[("timestamp", ASCENDING)],
        )
