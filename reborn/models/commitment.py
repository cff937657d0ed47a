"""Fixed commitment model"""
from typing import Optional
from uuid import UUID, uuid4

from pydantic import Field, model_validator

from reborn.models.base import DomainModel
from reborn.models.enums import DayOfWeek


class FixedCommitment(DomainModel):
    """An immovable weekly block (class, work) the scheduler must route around"""
    commitment_id: UUID = Field(default_factory=uuid4)
    user_id: UUID
    day_of_week: DayOfWeek
    start_time: int = Field(ge=0, le=1439, description="Minutes since midnight")
    end_time: int = Field(ge=0, le=1439, description="Minutes since midnight")
    description: Optional[str] = Field(default=None, max_length=255)

    @model_validator(mode='after')
    def start_before_end(self) -> 'FixedCommitment':
        if self.start_time >= self.end_time:
            raise ValueError(
                f"Commitment must start before it ends "
                f"(start={self.start_time}, end={self.end_time})"
            )
        return self

    def overlaps(self, start: int, end: int) -> bool:
        """True if the half-open interval [start, end) intersects this block"""
        return start < self.end_time and self.start_time < end
