"""Global test fixtures and utilities for reborn tests"""
import pytest
from datetime import date, datetime, timezone
from uuid import UUID

from reborn.models import (
    FixedCommitment,
    Habit,
    Schedule,
    ScheduledSlot,
    TimeWindow,
    User,
)

BCRYPT_HASH = "$2b$12$" + "a" * 53


# ============================================================================
# Identity Fixtures
# ============================================================================

@pytest.fixture
def user_id():
    """Standard test user ID"""
    return UUID("11111111-1111-4111-8111-111111111111")


@pytest.fixture
def schedule_id():
    """Standard test schedule ID"""
    return UUID("22222222-2222-4222-8222-222222222222")


@pytest.fixture
def monday():
    """A Monday (DayOfWeek.MONDAY == 1)"""
    return date(2025, 11, 3)


@pytest.fixture
def now():
    return datetime(2025, 11, 3, 12, 0, 0, tzinfo=timezone.utc)


# ============================================================================
# Entity Fixtures
# ============================================================================

@pytest.fixture
def test_user(user_id, now):
    """Standard test user with default preferences"""
    return User(
        user_id=user_id,
        email="test@example.com",
        password_hash=BCRYPT_HASH,
        timezone="Europe/Stockholm",
        created_at=now,
    )


@pytest.fixture
def make_habit(user_id):
    """Factory for habits owned by the test user"""
    def _make(duration=30, **kwargs):
        kwargs.setdefault("name", "Read")
        kwargs.setdefault("created_date", date(2025, 10, 1))
        return Habit(user_id=user_id, duration=duration, **kwargs)
    return _make


@pytest.fixture
def reading_habit(make_habit):
    """30-minute habit that can go anywhere in the day"""
    return make_habit(duration=30)


@pytest.fixture
def make_slot(schedule_id):
    """Factory for slots on the test schedule"""
    def _make(start, end, habit_id=None, **kwargs):
        return ScheduledSlot(
            schedule_id=kwargs.pop("schedule_id", schedule_id),
            habit_id=habit_id or UUID("33333333-3333-4333-8333-333333333333"),
            start_time=start,
            end_time=end,
            **kwargs
        )
    return _make


@pytest.fixture
def make_schedule(schedule_id, user_id, monday, now):
    """Factory for a schedule on Monday holding the given slots"""
    def _make(slots=(), **kwargs):
        return Schedule(
            schedule_id=schedule_id,
            user_id=kwargs.pop("user_id", user_id),
            date=kwargs.pop("date", monday),
            slots=tuple(slots),
            generated_timestamp=now,
            **kwargs
        )
    return _make


@pytest.fixture
def monday_lecture(user_id):
    """Monday 10:00-12:00 class"""
    return FixedCommitment(
        user_id=user_id,
        day_of_week=1,
        start_time=600,
        end_time=720,
        description="OS Lecture",
    )


@pytest.fixture
def morning_habit(make_habit):
    return make_habit(
        duration=60,
        name="Gym",
        preferred_time_windows=[TimeWindow.EARLY_MORNING, TimeWindow.MORNING],
    )


@pytest.fixture
def password_hash():
    """bcrypt-shaped hash (60 chars)"""
    return BCRYPT_HASH
