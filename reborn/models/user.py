"""User-related models"""
from datetime import datetime, timezone as dt_timezone
from uuid import UUID, uuid4

import pytz
from pydantic import AwareDatetime, EmailStr, Field, field_validator

from reborn.config import DEFAULT_TIMEZONE
from reborn.models.base import DomainModel
from reborn.models.preferences import UserPreferences

MAX_EMAIL_LENGTH = 255


def validate_email_length(v: str) -> str:
    if len(v) > MAX_EMAIL_LENGTH:
        raise ValueError(
            f"Email too long ({len(v)} characters). Maximum is {MAX_EMAIL_LENGTH}."
        )
    return v


def validate_iana_timezone(v: str) -> str:
    """Ensure valid IANA timezone"""
    try:
        pytz.timezone(v)
    except pytz.exceptions.UnknownTimeZoneError:
        raise ValueError(
            f"Invalid timezone: '{v}'. "
            f"Use IANA timezone (e.g., 'Europe/Stockholm', 'America/New_York')"
        )
    return v


class User(DomainModel):
    """An account; owns habits, commitments, check-ins, schedules and predictions"""
    user_id: UUID = Field(default_factory=uuid4)
    email: EmailStr
    password_hash: str = Field(min_length=60, description="bcrypt hash")
    timezone: str = DEFAULT_TIMEZONE
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    created_at: AwareDatetime = Field(default_factory=lambda: datetime.now(dt_timezone.utc))

    @field_validator('email')
    @classmethod
    def check_email_length(cls, v: str) -> str:
        return validate_email_length(v)

    @field_validator('timezone')
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        return validate_iana_timezone(v)
