"""Tests for the one-sitting slot search."""

import pytest

from feasibility.models import (
    DayOfWeek, FixedCommitment, SessionBlock, SlotFailure, StudyPlanSession, UserSettings,
)
from feasibility.slots import (
    find_free_gaps, find_next_available_time_slot, find_slot, merge_intervals,
)
from feasibility.timeutils import parse_time

from .conftest import NEXT_MONDAY, TUESDAY


def _commitment(cid, start, end, days=None):
    return FixedCommitment(
        id=cid,
        title=f"Commitment {cid}",
        days_of_week=days or [DayOfWeek.MONDAY],
        start_time=start,
        end_time=end,
    )


def test_merge_intervals_joins_overlapping_and_adjacent():
    """Test that overlapping and touching intervals collapse into one."""
    assert merge_intervals([(600, 660), (540, 600), (700, 720), (710, 800), (900, 900)]) == [
        (540, 660),
        (700, 800),
    ]


def test_free_gaps_are_clipped_to_window():
    """Test that busy time outside the window does not create gaps."""
    gaps = find_free_gaps([(300, 540), (600, 660), (1000, 1200)], 480, 1080)
    assert gaps == [(540, 600), (660, 1000)]


def test_first_qualifying_gap_after_commitment(work_settings, monday_lecture):
    """Test that a 3h request skips the 1h gap before a 09:00-11:00 commitment."""
    result = find_slot(NEXT_MONDAY, 3, work_settings, [monday_lecture], [])
    assert result.found
    assert result.start == "11:00"
    assert result.end == "14:00"


def test_short_request_uses_earliest_gap(work_settings, monday_lecture):
    """Test that the earliest qualifying gap wins."""
    result = find_slot(NEXT_MONDAY, 1, work_settings, [monday_lecture], [])
    assert (result.start, result.end) == ("08:00", "09:00")


def test_study_blocks_are_occupied(work_settings, monday_lecture, monday_plan):
    """Test that planned sessions on the same date are treated as busy."""
    result = find_slot(NEXT_MONDAY, 3, work_settings, [monday_lecture], [monday_plan])
    assert result.start == "14:30"
    assert result.end == "17:30"


def test_skipped_blocks_and_other_dates_are_free(work_settings, monday_lecture):
    """Test that skipped blocks and blocks on other dates do not occupy time."""
    plans = [
        StudyPlanSession(date=NEXT_MONDAY, blocks=[
            SessionBlock(task_id="a", start_time="11:00", end_time="15:00", skipped=True),
        ]),
        StudyPlanSession(date=TUESDAY, blocks=[
            SessionBlock(task_id="b", start_time="11:00", end_time="15:00"),
        ]),
    ]
    result = find_slot(NEXT_MONDAY, 3, work_settings, [monday_lecture], plans)
    assert result.start == "11:00"


def test_commitment_on_other_weekday_is_ignored(work_settings):
    """Test that commitments not applying on the date leave the day free."""
    tuesday_only = _commitment("t", "08:00", "18:00", days=[DayOfWeek.TUESDAY])
    result = find_slot(NEXT_MONDAY, 10, work_settings, [tuesday_only], [])
    assert (result.start, result.end) == ("08:00", "18:00")


def test_fully_booked_day(work_settings):
    """Test that a day covered by commitments reports fully booked."""
    commitments = [
        _commitment("a", "07:00", "12:00"),
        _commitment("b", "12:00", "15:30"),
        _commitment("c", "15:00", "19:00"),
    ]
    result = find_slot(NEXT_MONDAY, 1, work_settings, commitments, [])
    assert not result.found
    assert result.failure == SlotFailure.FULLY_BOOKED
    assert "fully booked" in result.reason.lower()
    assert result.largest_gap_hours == 0


def test_largest_gap_too_short(work_settings):
    """Test that fragmented days report the largest gap rather than fully booked."""
    commitments = [
        _commitment("a", "09:00", "11:00"),
        _commitment("b", "12:30", "15:00"),
        _commitment("c", "16:00", "18:00"),
    ]
    result = find_slot(NEXT_MONDAY, 2, work_settings, commitments, [])
    assert not result.found
    assert result.failure == SlotFailure.GAP_TOO_SHORT
    assert result.largest_gap_hours == 1.5
    assert "11:00-12:30" in result.reason


def test_request_longer_than_window(work_settings):
    """Test that asking for more than the whole window fails as too short."""
    result = find_slot(NEXT_MONDAY, 11, work_settings, [], [])
    assert result.failure == SlotFailure.GAP_TOO_SHORT
    assert result.largest_gap_hours == 10


def test_exact_fit_is_found(work_settings):
    """Test that a gap exactly as long as the request qualifies."""
    result = find_slot(NEXT_MONDAY, 1, work_settings, [_commitment("a", "09:00", "18:00")], [])
    assert (result.start, result.end) == ("08:00", "09:00")


@pytest.mark.parametrize("duration", [0, -1, -0.5, float("nan"), float("inf"), "2"])
def test_invalid_duration_is_rejected(work_settings, duration):
    """Test that non-positive or non-numeric durations are never treated as satisfied."""
    result = find_next_available_time_slot("2024-01-08", duration, work_settings, [], [])
    assert not result.found
    assert result.failure == SlotFailure.INVALID_DURATION


def test_invalid_date_is_rejected(work_settings):
    """Test that a malformed date returns a failed result with a reason."""
    result = find_next_available_time_slot("2024/01/08", 1, work_settings)
    assert not result.found
    assert result.failure == SlotFailure.INVALID_DATE
    assert "2024/01/08" in result.reason


def test_fallback_window_caps_duration(fallback_settings):
    """Test that the daily budget caps requests when no window is configured."""
    assert find_slot(NEXT_MONDAY, 4, fallback_settings, [], []).start == "00:00"
    result = find_slot(NEXT_MONDAY, 5, fallback_settings, [], [])
    assert result.failure == SlotFailure.EXCEEDS_DAILY_BUDGET


def test_zero_daily_hours_in_fallback_is_infeasible():
    """Test that a zero daily budget is reported, not divided by."""
    result = find_slot(NEXT_MONDAY, 1, UserSettings(daily_available_hours=0), [], [])
    assert result.failure == SlotFailure.NO_WINDOW


def test_zero_length_window_is_infeasible():
    """Test that a zero-length window is always infeasible."""
    settings = UserSettings(study_window_start="10:00", study_window_end="10:00")
    result = find_slot(NEXT_MONDAY, 0.5, settings, [], [])
    assert result.failure == SlotFailure.NO_WINDOW
    assert result.reason


def test_non_work_day_is_infeasible(work_settings):
    """Test that non-work days have no slot."""
    settings = work_settings.model_copy(update={"work_days": [DayOfWeek.TUESDAY]})
    result = find_slot(NEXT_MONDAY, 1, settings, [], [])
    assert result.failure == SlotFailure.NO_WINDOW
    assert "not a work day" in result.reason


def test_fractional_hours_round_up_to_minutes(work_settings):
    """Test that 1h20m entered as fractional hours ends on the minute."""
    result = find_slot(NEXT_MONDAY, 1 + 20 / 60, work_settings, [], [])
    assert result.end == "09:20"


def test_slot_never_overlaps_busy_time_or_leaves_window(work_settings, monday_plan):
    """Test that found slots stay inside the window and clear of every busy interval."""
    commitments = [
        _commitment("a", "07:30", "08:45"),
        _commitment("b", "10:00", "10:30"),
        _commitment("c", "12:00", "13:15"),
        _commitment("d", "16:45", "19:00"),
    ]
    busy = [(parse_time(c.start_time), parse_time(c.end_time)) for c in commitments]
    busy += [(parse_time(b.start_time), parse_time(b.end_time)) for b in monday_plan.blocks]

    for quarter_hours in range(1, 41):
        duration = quarter_hours / 4
        result = find_slot(NEXT_MONDAY, duration, work_settings, commitments, [monday_plan])
        if not result.found:
            continue
        start, end = parse_time(result.start), parse_time(result.end)
        assert 8 * 60 <= start < end <= 18 * 60
        assert all(end <= b_start or start >= b_end for b_start, b_end in busy)


def test_shorter_duration_never_fails_where_longer_succeeds(work_settings, monday_lecture, monday_plan):
    """Test monotonicity in duration: a shorter request is found no later than a longer one."""
    for quarter_hours in range(2, 41):
        longer = find_slot(NEXT_MONDAY, quarter_hours / 4, work_settings, [monday_lecture], [monday_plan])
        if not longer.found:
            continue
        for shorter_quarters in range(1, quarter_hours):
            shorter = find_slot(
                NEXT_MONDAY, shorter_quarters / 4, work_settings, [monday_lecture], [monday_plan]
            )
            assert shorter.found
            assert parse_time(shorter.start) <= parse_time(longer.start)
