"""
Task Feasibility Engine - Slot Finder
Gap analysis over one day's study window: finds the earliest free block of a required length
"""

from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from .availability import window_for
from .commitments import occupied_interval
from .exceptions import InvalidInputError
from .logger import logger
from .models import (
    FixedCommitment, SlotFailure, SlotResult, StudyPlanSession, UserSettings, WindowSource,
)
from .timeutils import (
    DateLike, format_hours, format_minutes, hours_to_minutes, is_positive_hours, parse_date, parse_time,
)


Interval = Tuple[int, int]


# ============================================
# BUSY BLOCKS
# ============================================

def collect_busy_blocks(
    day: date,
    commitments: Sequence[FixedCommitment],
    study_plans: Sequence[StudyPlanSession]
) -> List[Dict]:
    """
    Build the list of occupied blocks for a day.
    Fixed commitments that apply on the date plus non-skipped study blocks dated that day.
    """
    busy_blocks = []

    for commitment in commitments:
        interval = occupied_interval(commitment, day)
        if interval is None:
            continue
        busy_blocks.append({
            "start": interval[0],
            "end": interval[1],
            "type": "commitment",
            "label": commitment.title
        })

    for plan in study_plans:
        if plan.date != day:
            continue
        for block in plan.blocks:
            if block.skipped:
                continue
            busy_blocks.append({
                "start": parse_time(block.start_time),
                "end": parse_time(block.end_time),
                "type": "session",
                "label": block.task_id
            })

    return busy_blocks


def merge_intervals(intervals: Sequence[Interval]) -> List[Interval]:
    """Sort intervals by start and merge overlapping or touching ones."""
    merged: List[Interval] = []
    for start, end in sorted(intervals):
        if end <= start:
            continue
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


def find_free_gaps(busy: Sequence[Interval], window_start: int, window_end: int) -> List[Interval]:
    """Free gaps inside [window_start, window_end) in chronological order."""
    gaps = []
    current_time = window_start

    for start, end in merge_intervals(busy):
        # Clip to the window
        start = max(start, window_start)
        end = min(end, window_end)
        if end <= start:
            continue
        if start > current_time:
            gaps.append((current_time, start))
        current_time = max(current_time, end)

    if current_time < window_end:
        gaps.append((current_time, window_end))

    return gaps


# ============================================
# SLOT SEARCH
# ============================================

def _failure(failure: SlotFailure, reason: str, largest_gap_hours: Optional[float] = None) -> SlotResult:
    logger.info(f"No slot: {reason}")
    return SlotResult(found=False, reason=reason, failure=failure, largest_gap_hours=largest_gap_hours)


def _invalid_duration(duration_hours) -> bool:
    return not is_positive_hours(duration_hours)


def find_slot(
    day: date,
    duration_hours: float,
    settings: UserSettings,
    commitments: Sequence[FixedCommitment],
    study_plans: Sequence[StudyPlanSession]
) -> SlotResult:
    """
    Find the earliest free contiguous block of duration_hours on a day.

    The block is placed at the start of the first gap that is long enough,
    leaving the rest of the day free for other work.
    """
    if _invalid_duration(duration_hours):
        return _failure(
            SlotFailure.INVALID_DURATION,
            f"Invalid duration {duration_hours!r}: must be a positive number of hours"
        )

    window = window_for(day, settings)
    if window.hours <= 0:
        return _failure(
            SlotFailure.NO_WINDOW,
            window.reason or f"No study time available on {day.isoformat()}"
        )

    if window.source == WindowSource.FALLBACK:
        cap = window.duration_cap_hours or 0.0
        if cap <= 0:
            return _failure(
                SlotFailure.NO_WINDOW,
                "Daily available hours is zero, so no study time can be scheduled"
            )
        if duration_hours > cap:
            return _failure(
                SlotFailure.EXCEEDS_DAILY_BUDGET,
                f"Requested {format_hours(duration_hours)} exceeds the daily budget of {format_hours(cap)}"
            )

    required_mins = hours_to_minutes(duration_hours)
    window_start = window.start_minutes
    window_end = window.end_minutes

    busy_blocks = collect_busy_blocks(day, commitments, study_plans)
    gaps = find_free_gaps(
        [(b["start"], b["end"]) for b in busy_blocks],
        window_start,
        window_end
    )
    logger.debug(
        f"{day.isoformat()}: window {window.start}-{window.end}, "
        f"{len(busy_blocks)} busy blocks, {len(gaps)} gaps"
    )

    for gap_start, gap_end in gaps:
        if gap_end - gap_start >= required_mins:
            return SlotResult(
                found=True,
                start=format_minutes(gap_start),
                end=format_minutes(gap_start + required_mins),
            )

    if not gaps:
        return _failure(
            SlotFailure.FULLY_BOOKED,
            f"Day fully booked: no free time between {window.start} and {window.end} on {day.isoformat()}",
            largest_gap_hours=0.0
        )

    largest_start, largest_end = max(gaps, key=lambda g: g[1] - g[0])
    largest_hours = (largest_end - largest_start) / 60
    return _failure(
        SlotFailure.GAP_TOO_SHORT,
        f"Largest free block on {day.isoformat()} is {format_hours(largest_hours)} "
        f"({format_minutes(largest_start)}-{format_minutes(largest_end)}), "
        f"shorter than the requested {format_hours(duration_hours)}",
        largest_gap_hours=largest_hours
    )


def find_next_available_time_slot(
    target_date: DateLike,
    duration_hours: float,
    settings: UserSettings,
    fixed_commitments: Optional[Sequence[FixedCommitment]] = None,
    existing_study_plans: Optional[Sequence[StudyPlanSession]] = None
) -> SlotResult:
    """Date-string entry point for find_slot; invalid input comes back as a failed result."""
    if _invalid_duration(duration_hours):
        return _failure(
            SlotFailure.INVALID_DURATION,
            f"Invalid duration {duration_hours!r}: must be a positive number of hours"
        )
    try:
        day = parse_date(target_date)
    except InvalidInputError as e:
        return _failure(SlotFailure.INVALID_DATE, str(e))

    return find_slot(
        day,
        duration_hours,
        settings,
        fixed_commitments or [],
        existing_study_plans or []
    )
