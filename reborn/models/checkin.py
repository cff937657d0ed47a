"""Check-in model"""
from datetime import date, datetime, timezone
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from pydantic import AwareDatetime, Field, model_validator

from reborn.models.base import DomainModel
from reborn.models.enums import QualityRating

if TYPE_CHECKING:
    from reborn.models.requests import CreateCheckInRequest


class CheckIn(DomainModel):
    """Outcome for one habit on one day; never edited once recorded"""
    check_in_id: UUID = Field(default_factory=uuid4)
    habit_id: UUID
    date: date
    success: bool
    quality_rating: Optional[QualityRating] = None
    timestamp: AwareDatetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @model_validator(mode='after')
    def quality_matches_success(self) -> 'CheckIn':
        from reborn.validators import validate_check_in

        if not validate_check_in(self):
            if self.success:
                raise ValueError(
                    "A successful check-in needs a quality rating of HARD, GOOD or EASY"
                )
            raise ValueError(
                "A missed check-in can only carry no quality rating or FAIL"
            )
        return self

    @classmethod
    def from_request(
        cls,
        request: 'CreateCheckInRequest',
        timestamp: Optional[datetime] = None
    ) -> 'CheckIn':
        data = request.model_dump()
        if timestamp is not None:
            data["timestamp"] = timestamp
        return cls.model_validate(data)
