"""
Invariant validation layer

Pure predicates that check cross-field and cross-entity consistency before
an entity is accepted. None of them performs I/O or mutates its input, and
the boolean predicates never raise for well-typed input: they answer False.

Validation Categories:
1. Time windows - canonical, duplicate-free, ANY dominates
2. Check-ins - quality rating is only meaningful when the habit was done
3. Slots - span matches the habit duration exactly
4. Schedules - no overlapping slots, size cap, clear of fixed commitments
5. Spaced repetition - SM-2 state stays inside its bounds

Each check_* companion returns the InvariantViolation that failed (or None)
so a caller can report which rule rejected an entity; ensure_valid_schedule
raises the matching taxonomy error instead.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Optional

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from reborn.config import MAX_SLOTS_PER_SCHEDULE
from reborn.exceptions import InvariantViolation, error_for_violation
from reborn.models.commitment import FixedCommitment
from reborn.models.enums import QualityRating, TimeWindow, day_of_week_for, is_quality_rating
from reborn.models.habit import (
    MAX_EASINESS_FACTOR,
    MAX_INTERVAL_DAYS,
    MIN_EASINESS_FACTOR,
    MIN_INTERVAL_DAYS,
    Habit,
)
from reborn.models.preferences import SchedulingPreferences
from reborn.models.schedule import Schedule, ScheduledSlot

logger = logging.getLogger(__name__)

SUCCESS_QUALITIES = frozenset({QualityRating.HARD, QualityRating.GOOD, QualityRating.EASY})


def _get(obj: Any, name: str, alias: str) -> Any:
    """Read a field from a model or from a snake_case/wire-keyed mapping"""
    if isinstance(obj, Mapping):
        if name in obj:
            return obj[name]
        return obj.get(alias)
    return getattr(obj, name, None)


# ============================================================================
# TIME WINDOWS
# ============================================================================

def normalize_time_windows(windows: Iterable[Any]) -> list[TimeWindow]:
    """
    Canonical form of a habit's preferred windows

    - duplicates removed
    - empty input becomes [ANY]
    - ANY next to anything else collapses to [ANY]
    - output follows TimeWindow declaration order, so the result does not
      depend on input order and normalizing twice changes nothing

    Raises:
        ValueError: If an element is not a time window
    """
    chosen = {TimeWindow(w) for w in windows}
    if not chosen or TimeWindow.ANY in chosen:
        return [TimeWindow.ANY]
    return [window for window in TimeWindow if window in chosen]


# ============================================================================
# CHECK-INS
# ============================================================================

def check_check_in(check_in: Any) -> Optional[InvariantViolation]:
    success = _get(check_in, "success", "success")
    quality = _get(check_in, "quality_rating", "qualityRating")

    if success is False:
        if quality is None or (is_quality_rating(quality) and int(quality) == QualityRating.FAIL):
            return None
    elif success is True:
        if is_quality_rating(quality) and int(quality) in SUCCESS_QUALITIES:
            return None

    logger.debug(f"Check-in rejected: success={success!r} quality={quality!r}")
    return InvariantViolation.CHECK_IN_QUALITY_MISMATCH


def validate_check_in(check_in: Any) -> bool:
    """
    A missed check-in carries no quality or FAIL; a completed one carries
    exactly one of HARD, GOOD or EASY

    Accepts a CheckIn, a CreateCheckInRequest or a plain mapping.
    """
    return check_check_in(check_in) is None


# ============================================================================
# SLOTS AND SCHEDULES
# ============================================================================

def check_slot_duration(slot: ScheduledSlot, habit: Habit) -> Optional[InvariantViolation]:
    if slot.habit_id != habit.habit_id:
        return InvariantViolation.HABIT_MISMATCH
    if slot.end_time - slot.start_time != habit.duration:
        logger.debug(
            f"Slot {slot.slot_id} spans {slot.end_time - slot.start_time} min, "
            f"habit {habit.habit_id} needs {habit.duration}"
        )
        return InvariantViolation.SLOT_DURATION_MISMATCH
    return None


def validate_slot_duration(slot: ScheduledSlot, habit: Habit) -> bool:
    """Slot belongs to the habit and spans its duration exactly; no tolerance"""
    return check_slot_duration(slot, habit) is None


def find_overlapping_slots(slots: Iterable[ScheduledSlot]) -> Optional[tuple[ScheduledSlot, ScheduledSlot]]:
    """
    First pair of intersecting slots, or None

    Sorts by start and compares each slot with the furthest end seen so far.
    Intervals are half-open, so a slot ending at 510 and one starting at 510
    do not overlap.
    """
    ordered = sorted(slots, key=lambda s: (s.start_time, s.end_time))
    reach: Optional[ScheduledSlot] = None
    for slot in ordered:
        if reach is not None and slot.start_time < reach.end_time:
            return reach, slot
        if reach is None or slot.end_time > reach.end_time:
            reach = slot
    return None


def validate_no_slot_overlap(slots: Iterable[ScheduledSlot]) -> bool:
    """No two slots of one schedule may intersect; touching is allowed"""
    pair = find_overlapping_slots(slots)
    if pair is not None:
        logger.debug(f"Slots {pair[0].slot_id} and {pair[1].slot_id} overlap")
        return False
    return True


def validate_schedule_size(slots: Sequence[ScheduledSlot]) -> bool:
    return len(slots) <= MAX_SLOTS_PER_SCHEDULE


def validate_slots_avoid_commitments(
    slots: Iterable[ScheduledSlot],
    commitments: Iterable[FixedCommitment],
    day_of_week: int
) -> bool:
    """No slot may sit inside a fixed commitment falling on the same weekday"""
    blocking = [c for c in commitments if c.day_of_week == day_of_week]
    for slot in slots:
        for commitment in blocking:
            if commitment.overlaps(slot.start_time, slot.end_time):
                logger.debug(
                    f"Slot {slot.slot_id} collides with commitment {commitment.commitment_id}"
                )
                return False
    return True


def _add(found: list[InvariantViolation], violation: InvariantViolation) -> None:
    if violation not in found:
        found.append(violation)


def schedule_violations(
    schedule: Schedule,
    habits: Iterable[Habit],
    commitments: Iterable[FixedCommitment] = (),
    scheduling: Optional[SchedulingPreferences] = None
) -> list[InvariantViolation]:
    """
    Every invariant a schedule breaks, in first-seen order

    Checks that each slot references a known habit, spans exactly its
    duration and fits one of its preferred windows (and the user's daily
    window when given), that no two slots overlap, that the schedule is not
    oversized, and that no slot lands on a fixed commitment for that weekday.
    """
    by_id = {habit.habit_id: habit for habit in habits}
    found: list[InvariantViolation] = []

    if not validate_schedule_size(schedule.slots):
        _add(found, InvariantViolation.SCHEDULE_TOO_LARGE)

    day_window = scheduling.window_minutes if scheduling else None
    for slot in schedule.slots:
        habit = by_id.get(slot.habit_id)
        if habit is None:
            _add(found, InvariantViolation.UNKNOWN_HABIT)
            continue
        violation = check_slot_duration(slot, habit)
        if violation is not None:
            _add(found, violation)
        if not any(w.contains(slot.start_time, slot.end_time) for w in habit.preferred_time_windows):
            _add(found, InvariantViolation.SLOT_OUTSIDE_WINDOW)
        elif day_window and not (day_window[0] <= slot.start_time and slot.end_time <= day_window[1]):
            _add(found, InvariantViolation.SLOT_OUTSIDE_WINDOW)

    if not validate_no_slot_overlap(schedule.slots):
        _add(found, InvariantViolation.SLOT_OVERLAP)

    if not validate_slots_avoid_commitments(schedule.slots, commitments, day_of_week_for(schedule.date)):
        _add(found, InvariantViolation.SLOT_IN_COMMITMENT)

    return found


def ensure_valid_schedule(
    schedule: Schedule,
    habits: Iterable[Habit],
    commitments: Iterable[FixedCommitment] = (),
    scheduling: Optional[SchedulingPreferences] = None,
    user_id: Optional[str] = None
) -> Schedule:
    """
    Reject a schedule before it is persisted

    For callers accepting a schedule from anywhere other than an engine
    (imports, manual edits). Raises the taxonomy error of the first broken
    rule: StructuralConflictError for overlaps, size and commitments,
    InconsistentCombinationError for duration mismatches.
    """
    violations = schedule_violations(schedule, habits, commitments, scheduling)
    if violations:
        raise error_for_violation(
            violations[0],
            f"Schedule {schedule.schedule_id} rejected: "
            f"{', '.join(v.value for v in violations)}",
            field="slots",
            value=[v.value for v in violations],
            user_id=user_id,
            operation="ensure_valid_schedule",
        )
    return schedule


# ============================================================================
# SPACED REPETITION
# ============================================================================

def validate_repetition_state(state: Any) -> bool:
    """Easiness factor, interval and repetitions all inside their bounds"""
    easiness = _get(state, "easiness_factor", "easinessFactor")
    interval = _get(state, "interval", "interval")
    repetitions = _get(state, "repetitions", "repetitions")

    try:
        return (
            MIN_EASINESS_FACTOR <= float(easiness) <= MAX_EASINESS_FACTOR
            and isinstance(interval, int) and not isinstance(interval, bool)
            and MIN_INTERVAL_DAYS <= interval <= MAX_INTERVAL_DAYS
            and isinstance(repetitions, int) and not isinstance(repetitions, bool)
            and repetitions >= 0
        )
    except (TypeError, ValueError):
        return False


def check_repetition_state(state: Any) -> Optional[InvariantViolation]:
    if validate_repetition_state(state):
        return None
    return InvariantViolation.REPETITION_STATE_OUT_OF_RANGE


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================

def format_validation_error(e: Exception) -> str:
    """
    Format a pydantic validation error for display

    Args:
        e: ValidationError from pydantic (anything else is stringified)

    Returns:
        One-line message naming the first failing field
    """
    if not isinstance(e, PydanticValidationError):
        return f"Error: {str(e)}"

    errors = e.errors()
    if not errors:
        return "Validation failed"

    # Get first error for simplicity
    first_error = errors[0]
    loc = first_error.get('loc') or ('input',)
    msg = first_error.get('msg', 'Invalid value')

    field = ".".join(str(part) for part in loc)
    field_name = field.replace('_', ' ') if field else 'input'

    return f"Invalid {field_name}: {msg}"


def safe_validate(model_class: type[BaseModel], **data) -> tuple[Optional[BaseModel], Optional[str]]:
    """
    Safely validate data and return (validated_model, error_message)

    Args:
        model_class: pydantic model class
        **data: Data to validate

    Returns:
        Tuple of (validated_instance, error_message)
        - If valid: (instance, None)
        - If invalid: (None, readable_error)
    """
    try:
        instance = model_class(**data)
        return instance, None
    except PydanticValidationError as e:
        error_msg = format_validation_error(e)
        logger.warning(f"Validation failed for {model_class.__name__}: {error_msg}")
        return None, error_msg
