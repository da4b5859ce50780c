"""
Task Feasibility Engine - Time Utilities
Clock-time and calendar-date conversions shared by the engine components.
"""

import math
import re
from datetime import date, datetime
from typing import Union

from .exceptions import InvalidDateError, InvalidTimeError


MINUTES_PER_DAY = 24 * 60

TIME_PATTERN = r"^(([01]\d|2[0-3]):[0-5]\d|24:00)$"
_TIME_RE = re.compile(TIME_PATTERN)

DateLike = Union[date, str]


def parse_time(time_str: str) -> int:
    """Parse time string (HH:MM) to minutes since midnight. "24:00" is end of day."""
    if not isinstance(time_str, str) or not _TIME_RE.match(time_str):
        raise InvalidTimeError(f"Invalid time '{time_str}': expected HH:MM")
    parts = time_str.split(":")
    return int(parts[0]) * 60 + int(parts[1])


def format_minutes(minutes: int) -> str:
    """Format minutes since midnight as HH:MM (1440 renders as 24:00)."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def is_positive_hours(value) -> bool:
    """True for a finite, positive int or float; bools are not hours."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def hours_to_minutes(hours: float) -> int:
    """Convert fractional hours to whole minutes, rounding up, never below one minute."""
    # Strip float noise such as 1.3333333 * 60 = 80.00000001 before rounding up
    return max(1, math.ceil(round(hours * 60, 6)))


def format_hours(hours: float) -> str:
    """Format fractional hours for messages: 1.5 -> '1h 30m', 0.25 -> '15m'."""
    total = int(round(hours * 60))
    h, m = divmod(total, 60)
    if h == 0:
        return f"{m}m"
    if m == 0:
        return f"{h}h"
    return f"{h}h {m}m"


def parse_date(value: DateLike) -> date:
    """Parse an ISO-8601 calendar date (YYYY-MM-DD). date objects pass through."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), "%Y-%m-%d").date()
        except ValueError:
            pass
    raise InvalidDateError(f"Invalid date '{value}': expected YYYY-MM-DD")
