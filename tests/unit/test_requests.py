"""Tests for the create/update request projections"""
import pytest
from datetime import date, datetime, timezone
from pydantic import ValidationError

from reborn.models import (
    CheckIn,
    CreateCheckInRequest,
    CreateHabitRequest,
    CreateUserRequest,
    GenerateScheduleRequest,
    GenerateScheduleResponse,
    Habit,
    QualityRating,
    TimeWindow,
    UpdateHabitRequest,
)


class TestCreateUserRequest:
    """Test account creation requests"""

    def test_minimal(self):
        request = CreateUserRequest(email="new@example.com", password="hunter22")
        assert request.timezone is None
        assert request.preferences is None

    def test_bad_timezone(self):
        with pytest.raises(ValidationError, match="Invalid timezone"):
            CreateUserRequest(email="new@example.com", password="x", timezone="Nowhere/City")

    def test_bad_partial_preferences(self):
        """Test any preference field present must satisfy its bound"""
        with pytest.raises(ValidationError):
            CreateUserRequest(
                email="new@example.com",
                password="x",
                preferences={"prediction": {"riskThreshold": 3}},
            )

    def test_to_user(self, password_hash, now):
        request = CreateUserRequest(
            email="new@example.com",
            password="hunter22",
            timezone="America/New_York",
            preferences={"simulation": {"enabled": True}},
        )
        user = request.to_user(password_hash, created_at=now)

        assert user.email == "new@example.com"
        assert user.timezone == "America/New_York"
        assert user.preferences.simulation.enabled is True
        assert user.preferences.simulation.time_step == 0.05
        assert user.password_hash == password_hash

    def test_to_user_default_timezone(self, password_hash):
        user = CreateUserRequest(email="new@example.com", password="x").to_user(password_hash)
        assert user.timezone == "UTC"
        assert user.created_at.tzinfo is not None


class TestHabitRequests:
    """Test habit create/update projections"""

    def test_create_bounds(self):
        with pytest.raises(ValidationError, match="multiple of 5"):
            CreateHabitRequest(name="Run", duration=42)

    def test_create_from_wire(self):
        request = CreateHabitRequest.model_validate({
            "name": "Run",
            "duration": 45,
            "preferredTimeWindows": ["EARLY_MORNING"],
        })
        assert request.preferred_time_windows == (TimeWindow.EARLY_MORNING,)

    def test_habit_from_request(self, user_id):
        request = CreateHabitRequest(name="Run", duration=45, priority=5)
        habit = Habit.from_request(request, user_id, created_date=date(2025, 11, 1))

        assert habit.user_id == user_id
        assert habit.priority == 5
        assert habit.difficulty == 3
        assert habit.preferred_time_windows == (TimeWindow.ANY,)
        assert habit.created_date == date(2025, 11, 1)

    def test_update_fields_optional(self):
        request = UpdateHabitRequest()
        assert request.model_dump(exclude_unset=True) == {}

    def test_update_bounds(self):
        with pytest.raises(ValidationError):
            UpdateHabitRequest(priority=9)
        with pytest.raises(ValidationError):
            UpdateHabitRequest(duration=3)

    def test_apply_update(self, reading_habit):
        updated = reading_habit.apply_update(
            UpdateHabitRequest(duration=45, preferred_time_windows=[TimeWindow.EVENING, TimeWindow.ANY])
        )

        assert updated.duration == 45
        assert updated.preferred_time_windows == (TimeWindow.ANY,)
        assert updated.name == reading_habit.name
        assert updated.habit_id == reading_habit.habit_id
        assert reading_habit.duration == 30

    def test_apply_update_keeps_repetition_state(self, reading_habit):
        habit = reading_habit.with_repetition_state(reading_habit.repetition_state, streak=3)
        assert habit.apply_update(UpdateHabitRequest(name="Read more")).streak == 3


class TestCheckInRequest:
    def test_request_has_no_cross_field_rule(self, reading_habit, monday):
        """Test the coupling is enforced on the entity, not the request"""
        request = CreateCheckInRequest(habit_id=reading_habit.habit_id, date=monday, success=True)
        with pytest.raises(ValidationError, match="needs a quality rating"):
            request.to_check_in()

    def test_to_check_in(self, reading_habit, monday, now):
        request = CreateCheckInRequest(
            habit_id=reading_habit.habit_id,
            date=monday,
            success=True,
            quality_rating=QualityRating.HARD,
        )
        check_in = request.to_check_in(timestamp=now)

        assert isinstance(check_in, CheckIn)
        assert check_in.timestamp == now
        assert check_in.quality_rating == QualityRating.HARD

    def test_rating_bound(self, reading_habit, monday):
        with pytest.raises(ValidationError):
            CreateCheckInRequest(habit_id=reading_habit.habit_id, date=monday, success=True, quality_rating=4)


class TestScheduleRequests:
    def test_generate_request(self):
        assert GenerateScheduleRequest.model_validate({"date": "2025-11-03"}).date == date(2025, 11, 3)

    def test_response_wraps_schedule(self, make_schedule, make_slot):
        schedule = make_schedule([make_slot(480, 510)])
        response = GenerateScheduleResponse(schedule=schedule)

        assert response.predictions == ()
        assert response.to_wire()["schedule"]["slots"][0]["startTime"] == 480

    def test_response_timestamp_aware(self, make_schedule):
        response = GenerateScheduleResponse(schedule=make_schedule())
        assert response.schedule.generated_timestamp == datetime(2025, 11, 3, 12, 0, tzinfo=timezone.utc)
