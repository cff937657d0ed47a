"""Closed vocabularies shared by every entity"""
from datetime import date
from enum import Enum, IntEnum
from typing import Any


class TimeWindow(str, Enum):
    """Coarse bucket of the day a habit may be scheduled into"""
    EARLY_MORNING = "EARLY_MORNING"  # 06:00-09:00
    MORNING = "MORNING"  # 09:00-12:00
    AFTERNOON = "AFTERNOON"  # 12:00-17:00
    EVENING = "EVENING"  # 17:00-21:00
    NIGHT = "NIGHT"  # 21:00-24:00
    ANY = "ANY"  # 06:00-24:00

    @property
    def bounds(self) -> tuple[int, int]:
        """Half-open (start, end) in minutes since midnight"""
        return _WINDOW_BOUNDS[self]

    def contains(self, start: int, end: int) -> bool:
        """True if [start, end) lies entirely inside this window"""
        lo, hi = self.bounds
        return lo <= start and end <= hi


_WINDOW_BOUNDS = {
    TimeWindow.EARLY_MORNING: (6 * 60, 9 * 60),
    TimeWindow.MORNING: (9 * 60, 12 * 60),
    TimeWindow.AFTERNOON: (12 * 60, 17 * 60),
    TimeWindow.EVENING: (17 * 60, 21 * 60),
    TimeWindow.NIGHT: (21 * 60, 24 * 60),
    TimeWindow.ANY: (6 * 60, 24 * 60),
}


class QualityRating(IntEnum):
    """Completion quality, doubling as the spaced-repetition grade"""
    FAIL = 0
    HARD = 1
    GOOD = 2
    EASY = 3


class IntegrationMethod(str, Enum):
    """Stepping scheme used by the stability simulator"""
    EULER = "Euler"
    RK4 = "RK4"


class NotificationChannel(str, Enum):
    """Where intervention alerts are delivered"""
    EMAIL = "email"
    PUSH = "push"
    IN_APP = "in-app"


class DayOfWeek(IntEnum):
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


# ============================================================================
# MEMBERSHIP PREDICATES
# ============================================================================
# These accept anything and answer with a bool; they never raise.

def _is_member(enum_cls: type[Enum], value: Any) -> bool:
    if isinstance(value, enum_cls):
        return True
    if not isinstance(value, str):
        return False
    return value in enum_cls._value2member_map_


def _is_integral_member(enum_cls: type[IntEnum], value: Any) -> bool:
    # bool is an int subclass but True is not a rating
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        if not value.is_integer():
            return False
        value = int(value)
    if not isinstance(value, int):
        return False
    return value in enum_cls._value2member_map_


def is_time_window(value: Any) -> bool:
    return _is_member(TimeWindow, value)


def is_quality_rating(value: Any) -> bool:
    return _is_integral_member(QualityRating, value)


def is_integration_method(value: Any) -> bool:
    return _is_member(IntegrationMethod, value)


def is_notification_channel(value: Any) -> bool:
    return _is_member(NotificationChannel, value)


def is_day_of_week(value: Any) -> bool:
    return _is_integral_member(DayOfWeek, value)


def day_of_week_for(day: date) -> DayOfWeek:
    """Calendar date -> DayOfWeek (Sunday=0), unlike date.weekday() (Monday=0)"""
    return DayOfWeek((day.weekday() + 1) % 7)
