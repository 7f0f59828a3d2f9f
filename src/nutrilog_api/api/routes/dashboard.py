"""Dashboard and calendar API routes.

Both views read one local calendar day of meals through the same range
query; the dashboard groups them by category, the calendar does not.
"""

from datetime import date

from fastapi import APIRouter, Query

from nutrilog_api.api.dependencies import MealServiceDep, RequireBasic
from nutrilog_api.models.meal import CalendarDay, DashboardView

router = APIRouter()


@router.get("/dashboard", response_model=DashboardView, dependencies=[RequireBasic])
async def get_dashboard(
    service: MealServiceDep,
    day: date = Query(..., alias="date", description="Day to show (YYYY-MM-DD)"),
):
    """
    Get the day's meals grouped into Breakfast, Lunch, Dinner, Snack 1 and Snack 2.

    - **date**: Local calendar day

    ``unclassified_count`` reports meals whose category matched none of the
    five and were therefore left out.
    """
    return await service.dashboard(day)


@router.get("/calendar", response_model=CalendarDay, dependencies=[RequireBasic])
async def get_calendar_day(
    service: MealServiceDep,
    day: date = Query(..., alias="date", description="Day to show (YYYY-MM-DD)"),
):
    """
    Get all of the day's meals in time order.

    - **date**: Local calendar day
    """
    return await service.calendar(day)
