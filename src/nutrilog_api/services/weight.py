"""
Weight Service - Body-weight entries, chart data and progress.
"""

import logging
import math
from zoneinfo import ZoneInfo

from nutrilog_api.core.config import Settings, get_settings
from nutrilog_api.core.exceptions import ValidationError
from nutrilog_api.db.unit_of_work import UnitOfWork
from nutrilog_api.models.weight import (
    ChartPoint,
    TimeRange,
    WeightEntry,
    WeightEntryCreate,
    WeightOverview,
    WeightProgress,
)
from nutrilog_api.services.meals import store_errors
from nutrilog_api.utils.dates import format_chart_label, now_ms, range_start_ms

logger = logging.getLogger(__name__)


def parse_weight(raw: str | float) -> float:
    """
    Parse a weight as typed by the user.

    Raises:
        ValidationError: If the value is not a finite, positive number
    """
    try:
        value = float(str(raw).strip())
    except ValueError:
        raise ValidationError("Weight must be a number", details={"weight": raw}) from None
    if not math.isfinite(value) or value <= 0:
        raise ValidationError("Weight must be a positive number", details={"weight": raw})
    return value


def compute_progress(entries: list[WeightEntry]) -> WeightProgress | None:
    """
    Change from the earliest to the latest entry by date.

    A zero change counts as "lost".

    Returns:
        WeightProgress, or None with fewer than two entries
    """
    if len(entries) < 2:
        return None

    ordered = sorted(entries, key=lambda e: e.date)
    diff = ordered[-1].weight - ordered[0].weight
    return WeightProgress(
        total=f"{abs(diff):.1f}",
        direction="lost" if diff <= 0 else "gained",
    )


def build_chart(
    entries: list[WeightEntry],
    time_range: TimeRange,
    end_ms: int,
    tz: ZoneInfo,
) -> list[ChartPoint]:
    """Chart points inside the selected window, oldest first."""
    start_ms = range_start_ms(time_range.value, end_ms)
    return [
        ChartPoint(date=format_chart_label(e.date, tz), weight=e.weight)
        for e in sorted(entries, key=lambda e: e.date)
        if start_ms <= e.date <= end_ms
    ]


class WeightService:
    """Service for weight tracking operations."""

    def __init__(self, uow: UnitOfWork, settings: Settings | None = None):
        self.uow = uow
        self.settings = settings or get_settings()
        self.tz = ZoneInfo(self.settings.timezone)

    async def overview(
        self,
        time_range: TimeRange = TimeRange.MONTH,
        newest_first: bool = True,
    ) -> WeightOverview:
        """
        Entry list, chart and overall progress for the progress view.

        Args:
            time_range: Window applied to the chart points
            newest_first: Sort order of the entry list

        Returns:
            WeightOverview
        """
        with store_errors("Failed to load weight entries"):
            entries = await self.uow.weight_entries.list_all(newest_first=newest_first)

        return WeightOverview(
            entries=entries,
            chart=build_chart(entries, time_range, now_ms(), self.tz),
            progress=compute_progress(entries),
        )

    async def add_entry(self, data: WeightEntryCreate) -> WeightEntry:
        """
        Record a weight reading.

        Raises:
            ValidationError: If the weight is not numeric
            PersistenceError: If the write fails
        """
        weight = parse_weight(data.weight)
        date_ms = data.date if data.date is not None else now_ms()

        with store_errors("Failed to save weight entry"):
            entry = await self.uow.weight_entries.add(date_ms, weight)
        logger.info(f"Recorded weight {weight} at {date_ms}")
        return entry

    async def delete_entry(self, entry_id: str) -> None:
        with store_errors("Failed to delete weight entry"):
            deleted = await self.uow.weight_entries.delete(entry_id)
        if not deleted:
            logger.debug(f"Weight entry {entry_id} already absent")
