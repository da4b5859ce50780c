"""
Task Feasibility Engine
Local, advisory feasibility checks for a personal task planner
"""

from .models import (
    # Inputs
    FixedCommitment,
    DateRange,
    OccurrenceOverride,
    SessionBlock,
    StudyPlanSession,
    StudyWindowOverride,
    UserSettings,
    TaskDraft,
    # Results
    StudyWindow,
    SlotResult,
    ConflictResult,
    FrequencyRestrictions,
    DraftAssessment,
    # Enums
    Cadence,
    DayOfWeek,
    DeadlineType,
    EstimationMode,
    SlotFailure,
    WindowSource,
)

from .commitments import (
    applies_on,
    does_commitment_apply_to_date,
    occupied_interval,
)

from .availability import (
    window_for,
    get_effective_study_window,
)

from .slots import (
    find_slot,
    find_next_available_time_slot,
)

from .frequency import (
    CADENCE_DENSITY,
    check_conflict,
    check_frequency_deadline_conflict,
    frequency_restrictions,
    project_work_days,
    resolve_cadence,
    session_based_total_hours,
    session_work_days,
    to_decimal_hours,
)

from .intake import assess_task_draft

from .config import PolicyConfig, get_policy_config, reload_config


__all__ = [
    "FixedCommitment",
    "DateRange",
    "OccurrenceOverride",
    "SessionBlock",
    "StudyPlanSession",
    "StudyWindowOverride",
    "UserSettings",
    "TaskDraft",
    "StudyWindow",
    "SlotResult",
    "ConflictResult",
    "FrequencyRestrictions",
    "DraftAssessment",
    "Cadence",
    "DayOfWeek",
    "DeadlineType",
    "EstimationMode",
    "SlotFailure",
    "WindowSource",
    "applies_on",
    "does_commitment_apply_to_date",
    "occupied_interval",
    "window_for",
    "get_effective_study_window",
    "find_slot",
    "find_next_available_time_slot",
    "CADENCE_DENSITY",
    "check_conflict",
    "check_frequency_deadline_conflict",
    "frequency_restrictions",
    "project_work_days",
    "resolve_cadence",
    "session_based_total_hours",
    "session_work_days",
    "to_decimal_hours",
    "assess_task_draft",
    "PolicyConfig",
    "get_policy_config",
    "reload_config",
]
