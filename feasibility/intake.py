"""
Task Feasibility Engine - Task Intake Gate
Runs the feasibility checks that apply to a task draft and collects blocking errors and advisory warnings.
"""

from datetime import date
from typing import List, Optional, Sequence

from .config import PolicyConfig
from .frequency import (
    CADENCE_LABELS, check_conflict, frequency_restrictions, resolve_cadence,
    session_based_total_hours, to_decimal_hours,
)
from .logger import logger
from .models import (
    Cadence, DeadlineType, DraftAssessment, EstimationMode, FixedCommitment,
    StudyPlanSession, TaskDraft, UserSettings,
)
from .slots import find_slot
from .timeutils import format_hours


def effective_deadline_type(draft: TaskDraft) -> DeadlineType:
    """No deadline means 'none'; a deadline marked 'none' is treated as hard."""
    if draft.deadline is None:
        return DeadlineType.NONE
    if draft.deadline_type == DeadlineType.NONE:
        return DeadlineType.HARD
    return draft.deadline_type


def effective_total_hours(
    draft: TaskDraft,
    cadence: Cadence,
    start_date: date,
    deadline_type: DeadlineType,
    policy: Optional[PolicyConfig] = None
) -> float:
    """Direct hours + minutes entry, or session length x projected work days."""
    if draft.estimation_mode == EstimationMode.SESSION and not draft.one_sitting:
        if deadline_type == DeadlineType.NONE:
            return 0.0
        session_hours = to_decimal_hours(draft.session_duration_hours, draft.session_duration_minutes)
        return session_based_total_hours(session_hours, cadence, start_date, draft.deadline, policy)
    return to_decimal_hours(draft.estimated_hours, draft.estimated_minutes)


def assess_task_draft(
    draft: TaskDraft,
    settings: UserSettings,
    commitments: Sequence[FixedCommitment],
    study_plans: Sequence[StudyPlanSession],
    today: date,
    policy: Optional[PolicyConfig] = None
) -> DraftAssessment:
    """
    Gate a task draft before it is accepted.

    One-sitting drafts need a free block on the deadline date; multi-session
    drafts get the cadence check, whose conflicts are warnings only. `today`
    is passed in by the caller, the engine never reads the clock.
    """
    errors: List[str] = []
    warnings: List[str] = []

    deadline_type = effective_deadline_type(draft)
    deadline = draft.deadline if deadline_type != DeadlineType.NONE else None
    start_date = draft.start_date or today

    # One-sitting tasks are a single block on the deadline day
    cadence = Cadence.DAILY if draft.one_sitting else draft.cadence
    if deadline is not None and not draft.one_sitting:
        resolved = resolve_cadence(cadence, frequency_restrictions(start_date, deadline, policy))
        if resolved != cadence:
            warnings.append(
                f"{CADENCE_LABELS[cadence].capitalize()} sessions need more time before the deadline; "
                f"using {CADENCE_LABELS[resolved]} instead"
            )
            cadence = resolved

    hours = effective_total_hours(draft, cadence, start_date, deadline_type, policy)

    if hours <= 0:
        errors.append("Time estimation is required")
    if draft.deadline is not None and draft.deadline < today:
        errors.append("Deadline cannot be in the past")
    if draft.start_date is not None and draft.start_date < today:
        errors.append("Start date cannot be in the past")
    if deadline is not None and deadline < start_date:
        errors.append("Deadline cannot be before the start date")

    conflict = None
    slot = None

    if draft.one_sitting:
        if draft.deadline is None:
            errors.append("One-sitting tasks require a deadline")
        elif hours > 0:
            if hours > settings.daily_available_hours:
                errors.append(
                    f"One-sitting task duration ({format_hours(hours)}) exceeds daily available hours "
                    f"({format_hours(settings.daily_available_hours)})"
                )
            else:
                slot = find_slot(draft.deadline, hours, settings, commitments, study_plans)
                if not slot.found:
                    errors.append(f"No available time slot for one-sitting task on deadline date: {slot.reason}")
    elif deadline is not None and hours > 0 and deadline >= start_date:
        conflict = check_conflict(cadence, hours, deadline, start_date, settings.daily_available_hours, policy)
        if conflict.has_conflict:
            warnings.append(f"Frequency preference may not allow completion before deadline. {conflict.reason}")

    if errors:
        logger.info(f"Task draft rejected: {'; '.join(errors)}")

    return DraftAssessment(
        accepted=not errors,
        errors=errors,
        warnings=warnings,
        effective_hours=hours,
        deadline_type=deadline_type,
        cadence=cadence,
        conflict=conflict,
        slot=slot
    )
