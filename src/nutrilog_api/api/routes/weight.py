"""Weight progress API routes."""

from typing import Literal

from fastapi import APIRouter, Query, status

from nutrilog_api.api.dependencies import RequireFull, WeightServiceDep
from nutrilog_api.models.weight import TimeRange, WeightEntry, WeightEntryCreate, WeightOverview

router = APIRouter(dependencies=[RequireFull])


@router.get("", response_model=WeightOverview)
async def get_weight_overview(
    service: WeightServiceDep,
    time_range: TimeRange = Query(TimeRange.MONTH, alias="range"),
    sort: Literal["asc", "desc"] = "desc",
):
    """
    Get weight entries, chart points and overall progress.

    - **range**: Chart window, one of week, month (default) or year
    - **sort**: Entry list order by date, ``desc`` (newest first) or ``asc``
    """
    return await service.overview(time_range=time_range, newest_first=sort == "desc")


@router.post("", response_model=WeightEntry, status_code=status.HTTP_201_CREATED)
async def add_weight_entry(request: WeightEntryCreate, service: WeightServiceDep):
    """
    Record a weight reading.

    - **weight**: Numeric weight (numeric strings are accepted)
    - **date**: Epoch ms (defaults to now)
    """
    return await service.add_entry(request)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_weight_entry(entry_id: str, service: WeightServiceDep):
    """Delete a weight entry."""
    await service.delete_entry(entry_id)
