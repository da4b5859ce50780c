"""
Task Feasibility Engine - Frequency Feasibility Checker
Estimates whether a work cadence accumulates enough hours before a deadline
"""

import math
from datetime import date
from typing import Optional, Union

from .config import PolicyConfig, get_policy_config
from .exceptions import InvalidInputError
from .logger import logger
from .models import Cadence, ConflictResult, FrequencyRestrictions
from .timeutils import DateLike, format_hours, is_positive_hours, parse_date


# Sparsest first
CADENCE_DENSITY = (
    Cadence.FLEXIBLE,
    Cadence.WEEKLY,
    Cadence.THREE_TIMES_WEEKLY,
    Cadence.DAILY,
)

CADENCE_LABELS = {
    Cadence.DAILY: "daily",
    Cadence.THREE_TIMES_WEEKLY: "3x per week",
    Cadence.WEEKLY: "weekly",
    Cadence.FLEXIBLE: "flexible",
}


# ============================================
# WORK DAY PROJECTION
# ============================================

def to_decimal_hours(hours: float = 0, minutes: float = 0) -> float:
    """Combine an hours + minutes entry into fractional hours."""
    return (hours or 0) + (minutes or 0) / 60


def count_total_days(start_date: date, deadline: date) -> int:
    """Inclusive day count; the deadline day itself is available."""
    return (deadline - start_date).days + 1


def _raw_work_days(cadence: Cadence, total_days: int, policy: PolicyConfig) -> int:
    if cadence == Cadence.DAILY:
        return total_days
    if cadence == Cadence.THREE_TIMES_WEEKLY:
        quota = policy.three_times_weekly_quota
        return (total_days * quota) // 7 + min(quota, total_days % 7)
    if cadence == Cadence.WEEKLY:
        return math.ceil(total_days / 7)
    # Flexible: a fixed fraction of days; round first so 10 * 0.7 stays 7
    return math.ceil(round(total_days * policy.flexible_work_ratio, 6))


def project_work_days(
    cadence: Cadence,
    total_days: int,
    policy: Optional[PolicyConfig] = None
) -> int:
    """
    Number of days on which work happens under a cadence.

    Each cadence is capped at the projection of the next denser one, so the
    projection never decreases along CADENCE_DENSITY. With the default 0.7
    flexible ratio this means flexible projects no more days than weekly.
    """
    try:
        cadence = Cadence(cadence)
    except ValueError:
        raise InvalidInputError(f"Unknown frequency '{cadence}'")
    if total_days <= 0:
        return 0
    policy = policy or get_policy_config()

    cap = total_days
    days = 0
    for candidate in reversed(CADENCE_DENSITY):
        days = min(_raw_work_days(candidate, total_days, policy), cap)
        if candidate == cadence:
            break
        cap = days
    return days


def session_work_days(
    cadence: Cadence,
    total_days: int,
    policy: Optional[PolicyConfig] = None
) -> int:
    """
    Work days used to turn a session length into a total workload.

    Uses each cadence's own formula, bounded only by the day count, so the
    flexible ratio applies as configured.
    """
    try:
        cadence = Cadence(cadence)
    except ValueError:
        raise InvalidInputError(f"Unknown frequency '{cadence}'")
    if total_days <= 0:
        return 0
    return min(_raw_work_days(cadence, total_days, policy or get_policy_config()), total_days)


# ============================================
# CONFLICT CHECK
# ============================================

def _invalid(reason: str) -> ConflictResult:
    logger.warning(f"Frequency check rejected input: {reason}")
    return ConflictResult(has_conflict=True, reason=reason)


def check_conflict(
    cadence: Union[Cadence, str],
    total_hours_needed: float,
    deadline: DateLike,
    start_date: DateLike,
    daily_available_hours: float,
    policy: Optional[PolicyConfig] = None
) -> ConflictResult:
    """
    Compare a cadence's projected capacity against the hours needed.

    Advisory only: a conflict names the first denser cadence that would
    close the gap, or no recommendation when even daily work falls short.
    """
    try:
        cadence = Cadence(cadence)
    except ValueError:
        return _invalid(f"Unknown frequency '{cadence}'")

    if not is_positive_hours(total_hours_needed):
        return _invalid(f"Invalid workload {total_hours_needed!r}: must be a positive number of hours")

    try:
        deadline = parse_date(deadline)
        start_date = parse_date(start_date)
    except InvalidInputError as e:
        return _invalid(str(e))

    if deadline < start_date:
        return _invalid(
            f"Deadline {deadline.isoformat()} is before the start date {start_date.isoformat()}"
        )

    if not is_positive_hours(daily_available_hours):
        return _invalid("Daily available hours is zero, so no work can be scheduled before the deadline")

    policy = policy or get_policy_config()
    total_days = count_total_days(start_date, deadline)
    work_days = project_work_days(cadence, total_days, policy)
    capacity = work_days * daily_available_hours

    logger.debug(
        f"Cadence {cadence.value}: {work_days}/{total_days} work days, "
        f"capacity {capacity:.2f}h vs {total_hours_needed:.2f}h needed"
    )

    if capacity >= total_hours_needed:
        return ConflictResult(
            has_conflict=False,
            total_days=total_days,
            work_days=work_days,
            capacity_hours=capacity,
            shortfall_hours=0.0
        )

    recommended = None
    for candidate in CADENCE_DENSITY[CADENCE_DENSITY.index(cadence) + 1:]:
        if project_work_days(candidate, total_days, policy) * daily_available_hours >= total_hours_needed:
            recommended = candidate
            break

    reason = (
        f"{CADENCE_LABELS[cadence].capitalize()} sessions give about {work_days} work days "
        f"({format_hours(capacity)}) before the deadline, but the task needs "
        f"{format_hours(total_hours_needed)}."
    )
    if recommended is not None:
        reason += f" Switching to {CADENCE_LABELS[recommended]} would fit."
    else:
        reason += " Even daily work at your current daily hours is not enough."

    return ConflictResult(
        has_conflict=True,
        reason=reason,
        recommended_frequency=recommended,
        total_days=total_days,
        work_days=work_days,
        capacity_hours=capacity,
        shortfall_hours=total_hours_needed - capacity
    )


def check_frequency_deadline_conflict(
    cadence: Union[Cadence, str],
    total_hours_needed: float,
    deadline_date: DateLike,
    start_date: DateLike,
    daily_available_hours: float,
    policy: Optional[PolicyConfig] = None
) -> ConflictResult:
    """Date-string entry point for check_conflict."""
    return check_conflict(cadence, total_hours_needed, deadline_date, start_date, daily_available_hours, policy)


# ============================================
# CADENCE RESTRICTIONS & SESSION PROJECTION
# ============================================

def frequency_restrictions(
    start_date: date,
    deadline: Optional[date],
    policy: Optional[PolicyConfig] = None
) -> FrequencyRestrictions:
    """Sparse cadences need enough runway: weekly needs two weeks, 3x per week one week."""
    if deadline is None:
        return FrequencyRestrictions()
    policy = policy or get_policy_config()

    days_until = (deadline - start_date).days
    return FrequencyRestrictions(
        disable_weekly=days_until < policy.weekly_min_days,
        disable_three_times_weekly=days_until < policy.three_times_weekly_min_days,
        days_until_deadline=days_until
    )


def resolve_cadence(cadence: Cadence, restrictions: FrequencyRestrictions) -> Cadence:
    """Fall back to daily when the chosen cadence is not allowed."""
    if restrictions.allows(cadence):
        return cadence
    logger.info(f"Cadence {cadence.value} unavailable with {restrictions.days_until_deadline} days left, using daily")
    return Cadence.DAILY


def session_based_total_hours(
    session_hours: float,
    cadence: Cadence,
    start_date: date,
    deadline: Optional[date],
    policy: Optional[PolicyConfig] = None
) -> float:
    """Total workload implied by a session length repeated on every projected work day."""
    if deadline is None or not is_positive_hours(session_hours):
        return 0.0
    total_days = count_total_days(start_date, deadline)
    if total_days <= 0:
        return 0.0
    return session_hours * session_work_days(cadence, total_days, policy)
