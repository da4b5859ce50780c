"""
Task Feasibility Engine - Pydantic Models (v2 syntax)
Immutable input snapshots and result values exchanged with the task-entry caller.
"""

from datetime import date
from enum import Enum
from typing import Annotated, Optional, List, Dict
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .timeutils import TIME_PATTERN, parse_time, format_minutes


TimeOfDay = Annotated[str, Field(pattern=TIME_PATTERN)]


# ============================================
# ENUMS
# ============================================

class DayOfWeek(str, Enum):
    """Day of week, ordered to match date.weekday()"""
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_date(cls, day: date) -> "DayOfWeek":
        return list(cls)[day.weekday()]


class Cadence(str, Enum):
    DAILY = "daily"
    THREE_TIMES_WEEKLY = "three-times-weekly"
    WEEKLY = "weekly"
    FLEXIBLE = "flexible"

    @classmethod
    def _missing_(cls, value):
        # Older clients send the short form
        if isinstance(value, str):
            aliases = {
                "3x-week": cls.THREE_TIMES_WEEKLY,
                "3x_week": cls.THREE_TIMES_WEEKLY,
                "three_times_weekly": cls.THREE_TIMES_WEEKLY,
            }
            return aliases.get(value.strip().lower())
        return None


class DeadlineType(str, Enum):
    HARD = "hard"
    SOFT = "soft"
    NONE = "none"


class EstimationMode(str, Enum):
    TOTAL = "total"
    SESSION = "session"


class WindowSource(str, Enum):
    OVERRIDE = "override"
    CONFIGURED = "configured"
    FALLBACK = "fallback"
    NON_WORK_DAY = "non_work_day"
    INVALID = "invalid"


class SlotFailure(str, Enum):
    INVALID_DURATION = "invalid_duration"
    INVALID_DATE = "invalid_date"
    NO_WINDOW = "no_window"
    EXCEEDS_DAILY_BUDGET = "exceeds_daily_budget"
    FULLY_BOOKED = "fully_booked"
    GAP_TOO_SHORT = "gap_too_short"


def _check_time_order(start_time: str, end_time: str, label: str) -> None:
    if parse_time(start_time) >= parse_time(end_time):
        raise ValueError(f"{label}: start_time {start_time} must be before end_time {end_time}")


# ============================================
# CALENDAR MODELS
# ============================================

class DateRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_date: date
    end_date: date

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


class OccurrenceOverride(BaseModel):
    """Replacement times for a single occurrence of a commitment."""
    model_config = ConfigDict(frozen=True)

    start_time: TimeOfDay
    end_time: TimeOfDay
    all_day: bool = False

    @model_validator(mode="after")
    def _validate_times(self):
        if not self.all_day:
            _check_time_order(self.start_time, self.end_time, "Occurrence override")
        return self


class FixedCommitment(BaseModel):
    """A recurring (or date-listed) calendar obligation such as a class or a shift."""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    recurring: bool = True
    days_of_week: List[DayOfWeek] = Field(default_factory=list)
    specific_dates: List[date] = Field(default_factory=list)
    date_range: Optional[DateRange] = None
    excluded_dates: List[date] = Field(default_factory=list)
    modified_occurrences: Dict[date, OccurrenceOverride] = Field(default_factory=dict)
    start_time: TimeOfDay = "00:00"
    end_time: TimeOfDay = "24:00"
    all_day: bool = False

    @model_validator(mode="after")
    def _validate_times(self):
        if not self.all_day:
            _check_time_order(self.start_time, self.end_time, f"Commitment '{self.title}'")
        return self


class SessionBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    task_id: str
    start_time: TimeOfDay
    end_time: TimeOfDay
    skipped: bool = False


class StudyPlanSession(BaseModel):
    """Work blocks already committed to the calendar for one date."""
    model_config = ConfigDict(frozen=True)

    date: date
    blocks: List[SessionBlock] = Field(default_factory=list)


# ============================================
# SETTINGS
# ============================================

class StudyWindowOverride(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_time: TimeOfDay
    end_time: TimeOfDay
    active: bool = True


class UserSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    daily_available_hours: float = Field(default=6.0, ge=0.0, le=24.0)
    study_window_start: Optional[TimeOfDay] = None
    study_window_end: Optional[TimeOfDay] = None
    work_days: List[DayOfWeek] = Field(default_factory=lambda: list(DayOfWeek))
    date_overrides: Dict[date, StudyWindowOverride] = Field(default_factory=dict)

    @property
    def has_study_window(self) -> bool:
        return self.study_window_start is not None and self.study_window_end is not None


# ============================================
# TASK DRAFT
# ============================================

class TaskDraft(BaseModel):
    """Snapshot of a task being entered; the engine never mutates it."""
    model_config = ConfigDict(frozen=True)

    estimated_hours: float = Field(default=0.0, ge=0.0)
    estimated_minutes: float = Field(default=0.0, ge=0.0)
    estimation_mode: EstimationMode = EstimationMode.TOTAL
    session_duration_hours: float = Field(default=0.0, ge=0.0)
    session_duration_minutes: float = Field(default=30.0, ge=0.0)
    deadline: Optional[date] = None
    deadline_type: DeadlineType = DeadlineType.HARD
    start_date: Optional[date] = None
    cadence: Cadence = Cadence.DAILY
    one_sitting: bool = False


# ============================================
# RESULT MODELS
# ============================================

class StudyWindow(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: str
    end: str
    source: WindowSource
    duration_cap_hours: Optional[float] = None
    reason: Optional[str] = None

    @property
    def start_minutes(self) -> int:
        return parse_time(self.start)

    @property
    def end_minutes(self) -> int:
        return parse_time(self.end)

    @property
    def hours(self) -> float:
        return max(0, self.end_minutes - self.start_minutes) / 60

    @classmethod
    def empty(cls, source: WindowSource, reason: str) -> "StudyWindow":
        return cls(start=format_minutes(0), end=format_minutes(0), source=source, reason=reason)


class SlotResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    found: bool
    start: Optional[str] = None
    end: Optional[str] = None
    reason: Optional[str] = None
    failure: Optional[SlotFailure] = None
    largest_gap_hours: Optional[float] = None


class ConflictResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    has_conflict: bool
    reason: Optional[str] = None
    recommended_frequency: Optional[Cadence] = None
    total_days: Optional[int] = None
    work_days: Optional[int] = None
    capacity_hours: Optional[float] = None
    shortfall_hours: Optional[float] = None


class FrequencyRestrictions(BaseModel):
    model_config = ConfigDict(frozen=True)

    disable_weekly: bool = False
    disable_three_times_weekly: bool = False
    days_until_deadline: Optional[int] = None

    def allows(self, cadence: Cadence) -> bool:
        if cadence == Cadence.WEEKLY:
            return not self.disable_weekly
        if cadence == Cadence.THREE_TIMES_WEEKLY:
            return not self.disable_three_times_weekly
        return True


class DraftAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    accepted: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    effective_hours: float = 0.0
    deadline_type: DeadlineType = DeadlineType.NONE
    cadence: Cadence = Cadence.DAILY
    conflict: Optional[ConflictResult] = None
    slot: Optional[SlotResult] = None
