"""
Task Feasibility Engine - Commitment Calendar
Decides whether a fixed commitment occurs on a date and which part of the day it blocks.
"""

from datetime import date
from typing import Optional, Tuple

from .exceptions import InvalidInputError
from .logger import logger
from .models import DayOfWeek, FixedCommitment
from .timeutils import DateLike, MINUTES_PER_DAY, parse_date, parse_time


def applies_on(commitment: FixedCommitment, day: date) -> bool:
    """
    Check whether a commitment's recurrence rule covers a date.

    Recurring rules match on weekday, non-recurring rules on their listed
    dates. An optional validity range bounds both (inclusive). Empty or
    inverted rules never apply.
    """
    if day in commitment.excluded_dates:
        return False

    if commitment.date_range is not None:
        if commitment.date_range.start_date > commitment.date_range.end_date:
            return False
        if not commitment.date_range.contains(day):
            return False

    if commitment.recurring:
        return DayOfWeek.from_date(day) in commitment.days_of_week

    return day in commitment.specific_dates


def does_commitment_apply_to_date(commitment: FixedCommitment, target_date: DateLike) -> bool:
    """Date-string entry point for applies_on; unparseable dates never match."""
    try:
        day = parse_date(target_date)
    except InvalidInputError as e:
        logger.debug(f"Commitment check skipped: {e}")
        return False
    return applies_on(commitment, day)


def occupied_interval(commitment: FixedCommitment, day: date) -> Optional[Tuple[int, int]]:
    """
    Minutes-since-midnight interval the commitment blocks on a date.

    Returns None when the commitment does not apply. A modified occurrence
    replaces the usual times for that date only.
    """
    if not applies_on(commitment, day):
        return None

    override = commitment.modified_occurrences.get(day)
    if override is not None:
        if override.all_day:
            return 0, MINUTES_PER_DAY
        return parse_time(override.start_time), parse_time(override.end_time)

    if commitment.all_day:
        return 0, MINUTES_PER_DAY
    return parse_time(commitment.start_time), parse_time(commitment.end_time)
