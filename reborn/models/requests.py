"""
Create/update request projections

Thin, partial views of the entities. They add no invariants of their own:
every field that is present must satisfy the bound of the entity field it
feeds, and nothing more.
"""
from datetime import date, datetime, timezone as dt_timezone
from typing import Any, Optional
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from reborn.models.base import DomainModel
from reborn.models.checkin import CheckIn
from reborn.models.enums import QualityRating, TimeWindow
from reborn.models.habit import validate_duration_step, validate_habit_name
from reborn.models.prediction import Prediction
from reborn.models.schedule import Schedule
from reborn.models.user import User, validate_email_length, validate_iana_timezone


class CreateUserRequest(DomainModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=1024)
    timezone: Optional[str] = None
    preferences: Optional[dict[str, Any]] = None

    @field_validator('email')
    @classmethod
    def check_email_length(cls, v: str) -> str:
        return validate_email_length(v)

    @field_validator('timezone')
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return validate_iana_timezone(v)

    @field_validator('preferences')
    @classmethod
    def preferences_resolvable(cls, v: Optional[dict[str, Any]]) -> Optional[dict[str, Any]]:
        """Reject partial preferences that could never resolve"""
        if v is not None:
            from reborn.preferences import build_preferences
            build_preferences(v)
        return v

    def to_user(self, password_hash: str, created_at: Optional[datetime] = None) -> User:
        """
        Build the account record

        Hashing is the caller's job; only the hash is ever stored.
        """
        from reborn.preferences import resolve_preferences

        data: dict[str, Any] = {
            "email": self.email,
            "password_hash": password_hash,
            "preferences": resolve_preferences(self.preferences),
            "created_at": created_at or datetime.now(dt_timezone.utc),
        }
        if self.timezone is not None:
            data["timezone"] = self.timezone
        return User.model_validate(data)


class CreateHabitRequest(DomainModel):
    name: str = Field(min_length=1, max_length=100)
    duration: int = Field(ge=5, le=240)
    priority: Optional[int] = Field(default=None, ge=1, le=5)
    difficulty: Optional[int] = Field(default=None, ge=1, le=5)
    preferred_time_windows: Optional[tuple[TimeWindow, ...]] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_habit_name(v)

    @field_validator('duration')
    @classmethod
    def validate_duration(cls, v: int) -> int:
        return validate_duration_step(v)


class UpdateHabitRequest(DomainModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    duration: Optional[int] = Field(default=None, ge=5, le=240)
    priority: Optional[int] = Field(default=None, ge=1, le=5)
    difficulty: Optional[int] = Field(default=None, ge=1, le=5)
    preferred_time_windows: Optional[tuple[TimeWindow, ...]] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return validate_habit_name(v)

    @field_validator('duration')
    @classmethod
    def validate_duration(cls, v: Optional[int]) -> Optional[int]:
        if v is None:
            return v
        return validate_duration_step(v)


class CreateCheckInRequest(DomainModel):
    habit_id: UUID
    date: date
    success: bool
    quality_rating: Optional[QualityRating] = None

    def to_check_in(self, timestamp: Optional[datetime] = None) -> CheckIn:
        return CheckIn.from_request(self, timestamp=timestamp)


class GenerateScheduleRequest(DomainModel):
    date: date


class GenerateScheduleResponse(DomainModel):
    schedule: Schedule
    predictions: tuple[Prediction, ...] = ()
