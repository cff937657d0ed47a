"""Stability simulation snapshot model"""
import math
from datetime import datetime, timezone
from uuid import UUID, uuid4

from pydantic import AwareDatetime, Field, field_validator

from reborn.models.base import DomainModel


class SimulationSnapshot(DomainModel):
    """
    A physical-analogy stability reading for a habit

    A negative event_horizon_distance means the modeled stability has
    already collapsed past the failure threshold.
    """
    snapshot_id: UUID = Field(default_factory=uuid4)
    habit_id: UUID
    timestamp: AwareDatetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    radius: float = Field(ge=0.0)
    velocity: float
    drag: float = Field(ge=0.0, le=1.0)
    event_horizon_distance: float
    intervention_triggered: bool = False

    @field_validator('radius', 'velocity', 'event_horizon_distance')
    @classmethod
    def finite(cls, v: float, info) -> float:
        if not math.isfinite(v):
            raise ValueError(f"{info.field_name} must be a finite number")
        return v

    @property
    def threshold_crossed(self) -> bool:
        return self.event_horizon_distance < 0
