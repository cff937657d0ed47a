"""Tests for the enumerated domains and their membership predicates"""
import pytest
from datetime import date

from reborn.models.enums import (
    DayOfWeek,
    IntegrationMethod,
    NotificationChannel,
    QualityRating,
    TimeWindow,
    day_of_week_for,
    is_day_of_week,
    is_integration_method,
    is_notification_channel,
    is_quality_rating,
    is_time_window,
)

MALFORMED = [None, [], {}, object(), b"ANY", float("nan")]


class TestTimeWindow:
    """Test window vocabulary and bounds"""

    @pytest.mark.parametrize("window,bounds", [
        (TimeWindow.EARLY_MORNING, (360, 540)),
        (TimeWindow.MORNING, (540, 720)),
        (TimeWindow.AFTERNOON, (720, 1020)),
        (TimeWindow.EVENING, (1020, 1260)),
        (TimeWindow.NIGHT, (1260, 1440)),
        (TimeWindow.ANY, (360, 1440)),
    ])
    def test_bounds(self, window, bounds):
        assert window.bounds == bounds

    def test_any_covers_every_window(self):
        """Test ANY is a superset of each concrete window"""
        for window in TimeWindow:
            assert TimeWindow.ANY.contains(*window.bounds)

    def test_contains_is_half_open(self):
        assert TimeWindow.MORNING.contains(690, 720) is True
        assert TimeWindow.MORNING.contains(705, 735) is False

    def test_membership(self):
        assert is_time_window("EVENING") is True
        assert is_time_window(TimeWindow.NIGHT) is True
        assert is_time_window("evening") is False
        assert is_time_window("LUNCH") is False


class TestQualityRating:
    def test_ordered(self):
        assert QualityRating.FAIL < QualityRating.HARD < QualityRating.GOOD < QualityRating.EASY

    @pytest.mark.parametrize("value", [0, 1, 2, 3, 2.0, QualityRating.GOOD])
    def test_members(self, value):
        assert is_quality_rating(value) is True

    @pytest.mark.parametrize("value", [7, -1, 4, 1.5, True, False, "2", "GOOD"])
    def test_non_members(self, value):
        """Test out-of-range and wrongly-typed ratings are rejected"""
        assert is_quality_rating(value) is False


class TestOtherDomains:
    def test_integration_method(self):
        assert is_integration_method("Euler") is True
        assert is_integration_method(IntegrationMethod.RK4) is True
        assert is_integration_method("EULER") is False

    def test_notification_channel(self):
        assert is_notification_channel("in-app") is True
        assert is_notification_channel(NotificationChannel.EMAIL) is True
        assert is_notification_channel("sms") is False

    def test_day_of_week(self):
        assert is_day_of_week(0) is True
        assert is_day_of_week(DayOfWeek.SATURDAY) is True
        assert is_day_of_week(7) is False
        assert is_day_of_week(-1) is False

    @pytest.mark.parametrize("predicate", [
        is_time_window,
        is_quality_rating,
        is_integration_method,
        is_notification_channel,
        is_day_of_week,
    ])
    @pytest.mark.parametrize("value", MALFORMED)
    def test_never_raises(self, predicate, value):
        """Test malformed input gives False instead of an exception"""
        assert predicate(value) is False


class TestDayOfWeekFor:
    def test_sunday_is_zero(self):
        assert day_of_week_for(date(2025, 11, 2)) == DayOfWeek.SUNDAY

    def test_monday(self):
        assert day_of_week_for(date(2025, 11, 3)) == DayOfWeek.MONDAY

    def test_saturday(self):
        assert day_of_week_for(date(2025, 11, 8)) == DayOfWeek.SATURDAY
