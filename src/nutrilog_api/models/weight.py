"""Pydantic models for body-weight tracking."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class TimeRange(str, Enum):
    """Chart window options for the progress view."""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class WeightEntryCreate(BaseModel):
    """Request body for a new weight entry."""

    date: int | None = Field(None, description="Epoch ms, defaults to now")
    weight: str | float = Field(..., description="Weight as typed; must parse as a number")


class WeightEntry(BaseModel):
    id: str
    date: int
    weight: float


class ChartPoint(BaseModel):
    date: str
    weight: float


class WeightProgress(BaseModel):
    """Change between the earliest and latest entry."""

    total: str
    direction: Literal["lost", "gained"]


class WeightOverview(BaseModel):
    entries: list[WeightEntry]
    chart: list[ChartPoint]
    progress: WeightProgress | None = None
