"""User preference models with validation"""
import re
from datetime import time as dt_time
from typing import Literal, Optional, Union

from pydantic import Field, field_validator, model_validator

from reborn.models.base import DomainModel
from reborn.models.enums import IntegrationMethod, NotificationChannel

HHMM_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

UIExtraValue = Optional[Union[bool, int, float, str]]


def parse_hhmm(value: str) -> dt_time:
    """Parse an ``HH:MM`` string, raising ValueError on anything else"""
    if not isinstance(value, str) or not HHMM_PATTERN.match(value):
        raise ValueError(
            f"Invalid time format: '{value}'. Must be HH:MM (e.g., '06:00')"
        )
    return dt_time.fromisoformat(value)


def hhmm_to_minutes(value: str) -> int:
    parsed = parse_hhmm(value)
    return parsed.hour * 60 + parsed.minute


class SchedulingPreferences(DomainModel):
    """Daily scheduling window and slot grid"""
    daily_start_time: str = "06:00"
    daily_end_time: str = "23:00"
    time_slot_granularity: Literal[5, 15, 30] = 15

    @field_validator('daily_start_time', 'daily_end_time')
    @classmethod
    def validate_time_format(cls, v: str) -> str:
        """Ensure HH:MM format and valid time"""
        parse_hhmm(v)
        return v

    @model_validator(mode='after')
    def start_before_end(self) -> 'SchedulingPreferences':
        if hhmm_to_minutes(self.daily_start_time) >= hhmm_to_minutes(self.daily_end_time):
            raise ValueError(
                f"dailyStartTime ({self.daily_start_time}) must be before "
                f"dailyEndTime ({self.daily_end_time})"
            )
        return self

    @property
    def window_minutes(self) -> tuple[int, int]:
        """Half-open scheduling window in minutes since midnight"""
        return hhmm_to_minutes(self.daily_start_time), hhmm_to_minutes(self.daily_end_time)


class PredictionPreferences(DomainModel):
    """
    Failure predictor settings

    cold_start_threshold and recent_window_size share a default but are
    independent: one gates when predictions start, the other sizes the
    history the predictor reads.
    """
    cold_start_threshold: int = Field(default=7, ge=1, le=30, description="Days of history before predicting")
    recent_window_size: int = Field(default=7, ge=3, le=30, description="Days of history fed to the predictor")
    risk_threshold: float = Field(default=0.8, ge=0.0, le=1.0)


class AdaptiveFrequencyPreferences(DomainModel):
    """Spaced-repetition interval bounds"""
    enable_sm2: bool = Field(default=True, alias="enableSM2")
    min_interval: int = Field(default=1, ge=1, le=7, description="Days")
    max_interval: int = Field(default=90, ge=7, le=365, description="Days")

    @model_validator(mode='after')
    def min_not_above_max(self) -> 'AdaptiveFrequencyPreferences':
        if self.min_interval > self.max_interval:
            raise ValueError(
                f"minInterval ({self.min_interval}) cannot exceed "
                f"maxInterval ({self.max_interval})"
            )
        return self


class SimulationPreferences(DomainModel):
    enabled: bool = False
    integration_method: IntegrationMethod = IntegrationMethod.EULER
    time_step: float = Field(default=0.05, ge=0.01, le=0.2, description="Seconds")


class NotificationPreferences(DomainModel):
    enable_intervention_alerts: bool = True
    alert_threshold: float = Field(default=0.8, ge=0.0, le=1.0)
    channels: tuple[NotificationChannel, ...] = (NotificationChannel.IN_APP,)

    @field_validator('channels')
    @classmethod
    def dedupe_channels(cls, v: tuple[NotificationChannel, ...]) -> tuple[NotificationChannel, ...]:
        """Multi-select: keep each channel once, in declaration order"""
        chosen = set(v)
        return tuple(channel for channel in NotificationChannel if channel in chosen)


class UserPreferences(DomainModel):
    """Complete preference record; every group is always populated"""
    scheduling: SchedulingPreferences = Field(default_factory=SchedulingPreferences)
    prediction: PredictionPreferences = Field(default_factory=PredictionPreferences)
    adaptive_frequency: AdaptiveFrequencyPreferences = Field(default_factory=AdaptiveFrequencyPreferences)
    simulation: SimulationPreferences = Field(default_factory=SimulationPreferences)
    notifications: NotificationPreferences = Field(default_factory=NotificationPreferences)
    # UI-only settings live here instead of as arbitrary top-level keys
    ui_extras: dict[str, UIExtraValue] = Field(default_factory=dict)


PREFERENCE_GROUPS = (
    "scheduling",
    "prediction",
    "adaptive_frequency",
    "simulation",
    "notifications",
)
