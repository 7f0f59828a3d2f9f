"""Utility functions."""

from .dates import day_bounds_ms, format_meal_time, now_ms, utc_now

__all__ = ["day_bounds_ms", "format_meal_time", "now_ms", "utc_now"]
