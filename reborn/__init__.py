"""
Reborn habit-scheduling core

This package holds the contract shared by the scheduler, the failure
predictor, the adaptive controller and the stability simulator:
- Entity records and their closed vocabularies
- Preference resolution with a fixed default table
- Invariant validators for check-ins, slots and schedules
- Engine base classes that verify what each engine returns
"""

from reborn.models import (
    CheckIn,
    FixedCommitment,
    Habit,
    Prediction,
    Schedule,
    ScheduledSlot,
    SimulationSnapshot,
    User,
    UserPreferences,
)
from reborn.preferences import DEFAULT_USER_PREFERENCES, resolve_preferences
from reborn.validators import (
    ensure_valid_schedule,
    normalize_time_windows,
    validate_check_in,
    validate_no_slot_overlap,
    validate_slot_duration,
)

__version__ = "0.1.0"

__all__ = [
    "CheckIn",
    "FixedCommitment",
    "Habit",
    "Prediction",
    "Schedule",
    "ScheduledSlot",
    "SimulationSnapshot",
    "User",
    "UserPreferences",
    "DEFAULT_USER_PREFERENCES",
    "resolve_preferences",
    "ensure_valid_schedule",
    "normalize_time_windows",
    "validate_check_in",
    "validate_no_slot_overlap",
    "validate_slot_duration",
]
