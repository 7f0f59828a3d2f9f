"""Date and time utility functions.

Meals and weight entries store epoch milliseconds; day boundaries and
display labels are computed in the configured local timezone.
"""

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

UTC_TZ = timezone.utc


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC_TZ)


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return to_epoch_ms(utc_now())


def to_epoch_ms(dt: datetime) -> int:
    """
    Convert a datetime to epoch milliseconds.

    Args:
        dt: Datetime to convert (assumed UTC if no timezone)
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC_TZ)
    return int(dt.timestamp() * 1000)


def from_epoch_ms(ms: int, tz: ZoneInfo | timezone = UTC_TZ) -> datetime:
    """Epoch milliseconds to an aware datetime in ``tz``."""
    return datetime.fromtimestamp(ms / 1000, tz=tz)


def day_bounds_ms(day: date, tz: ZoneInfo | timezone) -> tuple[int, int]:
    """
    Inclusive epoch-ms bounds of a local calendar day.

    Args:
        day: Calendar day
        tz: Timezone the day is interpreted in

    Returns:
        Tuple of (00:00:00.000, 23:59:59.999) as epoch ms
    """
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return to_epoch_ms(start), to_epoch_ms(end) - 1


def format_meal_time(ms: int, tz: ZoneInfo | timezone) -> str:
    """
    Format a timestamp the way meal names show it.

    Returns:
        Time like "8:05 AM"
    """
    local = from_epoch_ms(ms, tz)
    hour = local.hour % 12 or 12
    return f"{hour}:{local.minute:02d} {'AM' if local.hour < 12 else 'PM'}"


def format_chart_label(ms: int, tz: ZoneInfo | timezone) -> str:
    """Short chart label like "Mar 4"."""
    local = from_epoch_ms(ms, tz)
    return f"{local.strftime('%b')} {local.day}"


def range_start_ms(time_range: str, end_ms: int) -> int:
    """
    Lower bound of a chart window ending at ``end_ms``.

    Args:
        time_range: One of 'week', 'month', 'year'
        end_ms: End of the window, epoch ms

    Returns:
        Start of the window, epoch ms
    """
    match time_range.lower():
        case "week":
            days = 7
        case "year":
            days = 365
        case _:
            # Default to month
            days = 30

    return end_ms - days * 24 * 60 * 60 * 1000
