"""Repository for the weight_entries collection."""

from pymongo import ASCENDING, DESCENDING

from nutrilog_api.models.weight import WeightEntry

from .base import BaseRepository


class WeightEntryRepository(BaseRepository[WeightEntry]):
    """Append/delete-only store of body-weight readings."""

    model_class = WeightEntry

    async def add(self, date_ms: int, weight: float) -> WeightEntry:
        entry_id = await self.insert_one({"date": date_ms, "weight": weight})
        return WeightEntry(id=entry_id, date=date_ms, weight=weight)

    async def list_all(self, newest_first: bool = True) -> list[WeightEntry]:
        """All entries sorted by date."""
        direction = DESCENDING if newest_first else ASCENDING
        return await self.find_many(sort=[("date", direction)])

    async def delete(self, entry_id: str) -> bool:
        return await self.delete_one(entry_id)
