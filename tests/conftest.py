"""Shared fixtures for feasibility engine tests.

Dates are fixed so every test is deterministic: 2024-01-01 and 2024-01-08 are Mondays.
"""

from datetime import date

import pytest

from feasibility.config import reload_config
from feasibility.models import (
    DayOfWeek, FixedCommitment, SessionBlock, StudyPlanSession, UserSettings,
)


MONDAY = date(2024, 1, 1)
NEXT_MONDAY = date(2024, 1, 8)
TUESDAY = date(2024, 1, 2)


@pytest.fixture(autouse=True)
def fresh_config():
    """Drop cached settings so environment changes in one test don't leak into another."""
    reload_config()
    yield
    reload_config()


@pytest.fixture
def work_settings():
    """08:00-18:00 study window, 8h daily budget."""
    return UserSettings(
        daily_available_hours=8,
        study_window_start="08:00",
        study_window_end="18:00",
    )


@pytest.fixture
def fallback_settings():
    """No study window configured: full day with a 4h cap."""
    return UserSettings(daily_available_hours=4)


@pytest.fixture
def monday_lecture():
    return FixedCommitment(
        id="c1",
        title="Linear Algebra",
        recurring=True,
        days_of_week=[DayOfWeek.MONDAY],
        start_time="09:00",
        end_time="11:00",
    )


@pytest.fixture
def monday_plan():
    return StudyPlanSession(
        date=NEXT_MONDAY,
        blocks=[
            SessionBlock(task_id="essay", start_time="13:00", end_time="14:30"),
        ],
    )
