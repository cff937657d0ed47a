"""Habit models"""
from datetime import date
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from pydantic import Field, field_validator

from reborn.models.base import DomainModel
from reborn.models.enums import TimeWindow

if TYPE_CHECKING:
    from reborn.models.requests import CreateHabitRequest, UpdateHabitRequest

MIN_EASINESS_FACTOR = 1.3
MAX_EASINESS_FACTOR = 3.0
DEFAULT_EASINESS_FACTOR = 2.5
MIN_INTERVAL_DAYS = 1
MAX_INTERVAL_DAYS = 365


class SpacedRepetitionState(DomainModel):
    """The (easiness factor, interval, repetitions) triple updated after each check-in"""
    easiness_factor: float = Field(
        default=DEFAULT_EASINESS_FACTOR, ge=MIN_EASINESS_FACTOR, le=MAX_EASINESS_FACTOR
    )
    interval: int = Field(default=MIN_INTERVAL_DAYS, ge=MIN_INTERVAL_DAYS, le=MAX_INTERVAL_DAYS)
    repetitions: int = Field(default=0, ge=0)


def validate_habit_name(v: str) -> str:
    trimmed = v.strip()
    if not trimmed:
        raise ValueError("Habit name cannot be empty or only whitespace")
    return trimmed


def validate_duration_step(v: int) -> int:
    if v % 5 != 0:
        raise ValueError(f"Duration must be a multiple of 5 minutes. Provided: {v}")
    return v


class Habit(DomainModel):
    """A recurring behavior to track, owned by one user"""
    habit_id: UUID = Field(default_factory=uuid4)
    user_id: UUID
    name: str = Field(min_length=1, max_length=100)
    duration: int = Field(ge=5, le=240, description="Minutes")
    priority: int = Field(default=3, ge=1, le=5, description="1=lowest, 5=highest")
    difficulty: int = Field(default=3, ge=1, le=5, description="1=easiest, 5=hardest")
    preferred_time_windows: tuple[TimeWindow, ...] = (TimeWindow.ANY,)
    easiness_factor: float = Field(
        default=DEFAULT_EASINESS_FACTOR, ge=MIN_EASINESS_FACTOR, le=MAX_EASINESS_FACTOR
    )
    interval: int = Field(default=MIN_INTERVAL_DAYS, ge=MIN_INTERVAL_DAYS, le=MAX_INTERVAL_DAYS)
    repetitions: int = Field(default=0, ge=0)
    streak: int = Field(default=0, ge=0)
    created_date: date = Field(default_factory=date.today)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_habit_name(v)

    @field_validator('duration')
    @classmethod
    def validate_duration(cls, v: int) -> int:
        return validate_duration_step(v)

    @field_validator('preferred_time_windows')
    @classmethod
    def canonical_windows(cls, v: tuple[TimeWindow, ...]) -> tuple[TimeWindow, ...]:
        from reborn.validators import normalize_time_windows
        return tuple(normalize_time_windows(v))

    @property
    def repetition_state(self) -> SpacedRepetitionState:
        return SpacedRepetitionState(
            easiness_factor=self.easiness_factor,
            interval=self.interval,
            repetitions=self.repetitions,
        )

    def with_repetition_state(
        self,
        state: SpacedRepetitionState,
        streak: Optional[int] = None
    ) -> 'Habit':
        """
        Return a copy carrying an updated spaced-repetition state

        This is the only field group that changes after a habit is created.
        The copy is re-validated, so an out-of-bounds state cannot slip in.
        """
        data = self.model_dump()
        data.update(state.model_dump())
        if streak is not None:
            data["streak"] = streak
        return Habit.model_validate(data)

    @classmethod
    def from_request(
        cls,
        request: 'CreateHabitRequest',
        user_id: UUID,
        created_date: Optional[date] = None
    ) -> 'Habit':
        """Build a new habit from a creation request, filling defaults"""
        data = request.model_dump(exclude_none=True)
        data["user_id"] = user_id
        if created_date is not None:
            data["created_date"] = created_date
        return cls.model_validate(data)

    def apply_update(self, request: 'UpdateHabitRequest') -> 'Habit':
        """Return a copy with the fields present in the update request replaced"""
        data = self.model_dump()
        data.update(request.model_dump(exclude_unset=True, exclude_none=True))
        return Habit.model_validate(data)
