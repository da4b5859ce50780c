"""
Task Feasibility Engine - Availability Window
Derives the clock-time window in which study work is permitted on a date.
"""

from datetime import date

from .exceptions import InvalidInputError
from .logger import logger
from .models import DayOfWeek, StudyWindow, UserSettings, WindowSource
from .timeutils import DateLike, MINUTES_PER_DAY, format_minutes, parse_date, parse_time


# Used when no working hours are configured: the whole calendar day,
# with the daily hour budget applied as a duration cap
FALLBACK_START = 0
FALLBACK_END = MINUTES_PER_DAY


def _bounded(start: str, end: str, source: WindowSource, label: str) -> StudyWindow:
    if parse_time(start) >= parse_time(end):
        return StudyWindow(
            start=start,
            end=start,
            source=source,
            reason=f"{label} {start}-{end} has zero length"
        )
    return StudyWindow(start=start, end=end, source=source)


def window_for(day: date, settings: UserSettings) -> StudyWindow:
    """
    Resolve the study window for a date.

    Resolution order:
        1. an active date-specific override
        2. non-work days get an empty window
        3. the configured study window
        4. fallback: full day, capped by daily_available_hours
    """
    override = settings.date_overrides.get(day)
    if override is not None and override.active:
        return _bounded(override.start_time, override.end_time, WindowSource.OVERRIDE, "Study window override")

    weekday = DayOfWeek.from_date(day)
    if weekday not in settings.work_days:
        return StudyWindow.empty(
            WindowSource.NON_WORK_DAY,
            f"{day.isoformat()} is a {weekday.value}, which is not a work day"
        )

    if settings.has_study_window:
        return _bounded(
            settings.study_window_start,
            settings.study_window_end,
            WindowSource.CONFIGURED,
            "Study window"
        )

    return StudyWindow(
        start=format_minutes(FALLBACK_START),
        end=format_minutes(FALLBACK_END),
        source=WindowSource.FALLBACK,
        duration_cap_hours=settings.daily_available_hours,
    )


def get_effective_study_window(target_date: DateLike, settings: UserSettings) -> StudyWindow:
    """Date-string entry point for window_for."""
    try:
        day = parse_date(target_date)
    except InvalidInputError as e:
        logger.warning(f"Study window requested for invalid date: {e}")
        return StudyWindow.empty(WindowSource.INVALID, str(e))
    return window_for(day, settings)
