"""Failure prediction models"""
import math
from datetime import date, datetime, timezone
from typing import Sequence
from uuid import UUID, uuid4

from pydantic import AwareDatetime, Field, field_validator

from reborn.models.base import DomainModel

FEATURE_COUNT = 6


class PredictionFeatures(DomainModel):
    """The fixed six-value feature vector behind a prediction"""
    x1: float
    x2: float
    x3: float
    x4: float
    x5: float
    x6: float

    @field_validator('x1', 'x2', 'x3', 'x4', 'x5', 'x6')
    @classmethod
    def finite(cls, v: float, info) -> float:
        if not math.isfinite(v):
            raise ValueError(f"Feature {info.field_name} must be a finite number")
        return v

    def as_vector(self) -> tuple[float, ...]:
        return (self.x1, self.x2, self.x3, self.x4, self.x5, self.x6)

    @classmethod
    def from_vector(cls, values: Sequence[float]) -> 'PredictionFeatures':
        if len(values) != FEATURE_COUNT:
            raise ValueError(
                f"Expected {FEATURE_COUNT} features, got {len(values)}"
            )
        return cls(**{f"x{i}": v for i, v in enumerate(values, start=1)})


class Prediction(DomainModel):
    """Forecasted failure risk for one habit on one date"""
    prediction_id: UUID = Field(default_factory=uuid4)
    habit_id: UUID
    date: date
    failure_probability: float = Field(ge=0.0, le=1.0)
    features: PredictionFeatures
    computed_at: AwareDatetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def is_at_risk(self, threshold: float) -> bool:
        """Compare against PredictionPreferences.risk_threshold"""
        return self.failure_probability >= threshold
