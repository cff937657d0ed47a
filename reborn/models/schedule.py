"""Schedule and slot models"""
from datetime import date, datetime, timezone
from uuid import UUID, uuid4

from pydantic import AwareDatetime, Field, field_validator, model_validator

from reborn.config import MAX_SLOTS_PER_SCHEDULE, SLOT_ALIGNMENT_MINUTES
from reborn.models.base import DomainModel


class ScheduledSlot(DomainModel):
    """One habit's placement within a schedule; lives and dies with it"""
    slot_id: UUID = Field(default_factory=uuid4)
    schedule_id: UUID
    habit_id: UUID
    start_time: int = Field(ge=0, le=1439, description="Minutes since midnight")
    end_time: int = Field(ge=1, le=1440, description="Minutes since midnight, exclusive")

    @field_validator('start_time')
    @classmethod
    def aligned_start(cls, v: int) -> int:
        if v % SLOT_ALIGNMENT_MINUTES != 0:
            raise ValueError(
                f"Slot start must be a multiple of {SLOT_ALIGNMENT_MINUTES} minutes. "
                f"Provided: {v}"
            )
        return v

    @model_validator(mode='after')
    def positive_span(self) -> 'ScheduledSlot':
        if self.end_time <= self.start_time:
            raise ValueError(
                f"Slot must end after it starts (start={self.start_time}, end={self.end_time})"
            )
        return self

    @property
    def span(self) -> int:
        return self.end_time - self.start_time


class Schedule(DomainModel):
    """One day's generated plan for a user"""
    schedule_id: UUID = Field(default_factory=uuid4)
    user_id: UUID
    date: date
    slots: tuple[ScheduledSlot, ...] = Field(default=(), max_length=MAX_SLOTS_PER_SCHEDULE)
    generated_timestamp: AwareDatetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode='after')
    def slots_belong_and_do_not_overlap(self) -> 'Schedule':
        from reborn.validators import validate_no_slot_overlap

        foreign = [s.slot_id for s in self.slots if s.schedule_id != self.schedule_id]
        if foreign:
            raise ValueError(
                f"{len(foreign)} slot(s) reference a different schedule"
            )
        if not validate_no_slot_overlap(self.slots):
            raise ValueError("Schedule contains overlapping slots")
        return self

    @property
    def habit_ids(self) -> set[UUID]:
        return {slot.habit_id for slot in self.slots}
