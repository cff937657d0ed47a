"""Domain records for users, habits, schedules, predictions and simulations"""
from reborn.models.enums import (
    DayOfWeek,
    IntegrationMethod,
    NotificationChannel,
    QualityRating,
    TimeWindow,
    day_of_week_for,
    is_day_of_week,
    is_integration_method,
    is_notification_channel,
    is_quality_rating,
    is_time_window,
)
from reborn.models.preferences import (
    AdaptiveFrequencyPreferences,
    NotificationPreferences,
    PredictionPreferences,
    SchedulingPreferences,
    SimulationPreferences,
    UserPreferences,
)
from reborn.models.user import User
from reborn.models.habit import Habit, SpacedRepetitionState
from reborn.models.commitment import FixedCommitment
from reborn.models.checkin import CheckIn
from reborn.models.schedule import Schedule, ScheduledSlot
from reborn.models.prediction import Prediction, PredictionFeatures
from reborn.models.simulation import SimulationSnapshot
from reborn.models.requests import (
    CreateCheckInRequest,
    CreateHabitRequest,
    CreateUserRequest,
    GenerateScheduleRequest,
    GenerateScheduleResponse,
    UpdateHabitRequest,
)

__all__ = [
    "DayOfWeek",
    "IntegrationMethod",
    "NotificationChannel",
    "QualityRating",
    "TimeWindow",
    "day_of_week_for",
    "is_day_of_week",
    "is_integration_method",
    "is_notification_channel",
    "is_quality_rating",
    "is_time_window",
    "AdaptiveFrequencyPreferences",
    "NotificationPreferences",
    "PredictionPreferences",
    "SchedulingPreferences",
    "SimulationPreferences",
    "UserPreferences",
    "User",
    "Habit",
    "SpacedRepetitionState",
    "FixedCommitment",
    "CheckIn",
    "Schedule",
    "ScheduledSlot",
    "Prediction",
    "PredictionFeatures",
    "SimulationSnapshot",
    "CreateCheckInRequest",
    "CreateHabitRequest",
    "CreateUserRequest",
    "GenerateScheduleRequest",
    "GenerateScheduleResponse",
    "UpdateHabitRequest",
]
