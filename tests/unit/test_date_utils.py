"""
Unit tests for the Monday-Sunday week window.
"""
import time
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from app.utils.date_utils import (
    current_week_window,
    end_of_day,
    start_of_day,
    to_utc,
    week_window,
)

@pytest.fixture
def new_york(monkeypatch):
    """Run the test with the server local zone set to America/New_York"""
    if not hasattr(time, 'tzset'):
        pytest.skip('needs time.tzset')
    monkeypatch.setenv('TZ', 'America/New_York')
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


class TestWeekWindow:
    """Week boundaries"""

    def test_midweek_maps_to_monday_and_sunday(self):
        """A Wednesday falls in the week starting the Monday before"""
        now = datetime(2024, 5, 15, 14, 30, tzinfo=timezone.utc)  # Wednesday
        start, end = week_window(now)

        assert start == datetime(2024, 5, 13, 0, 0, tzinfo=timezone.utc)
        assert end == datetime(2024, 5, 19, 23, 59, 59, 999999, tzinfo=timezone.utc)

    def test_monday_midnight_starts_its_own_week(self):
        now = datetime(2024, 5, 13, 0, 0, tzinfo=timezone.utc)
        start, _ = week_window(now)

        assert start == now

    def test_sunday_late_evening_belongs_to_previous_monday(self):
        """Sunday is the last day of the week, not the first"""
        now = datetime(2024, 5, 19, 23, 59, 59, tzinfo=timezone.utc)
        start, end = week_window(now)

        assert start.date() == date(2024, 5, 13)
        assert now <= end

    def test_window_spans_seven_days(self):
        start, end = week_window(datetime(2024, 2, 29, 9, tzinfo=timezone.utc))

        assert end - start == timedelta(days=7) - timedelta(microseconds=1)

    def test_window_uses_the_zone_of_now(self):
        """Monday 01:00 in Kolkata is still Sunday in UTC"""
        kolkata = ZoneInfo('Asia/Kolkata')
        now = datetime(2024, 5, 13, 1, 0, tzinfo=kolkata)
        start, end = week_window(now)

        assert start == datetime(2024, 5, 13, 0, 0, tzinfo=kolkata)
        assert to_utc(start) == datetime(2024, 5, 12, 18, 30, tzinfo=timezone.utc)
        assert end.tzinfo is kolkata

    def test_naive_now_is_local_time(self):
        now = datetime(2024, 5, 15, 12, 0)
        start, end = week_window(now)

        assert start.tzinfo is not None
        assert start.date() == date(2024, 5, 13)
        assert end.date() == date(2024, 5, 19)


class TestCurrentWeekWindow:
    """Window for an injected clock"""

    def test_clock_is_converted_into_the_configured_zone(self):
        """Sunday 20:00 UTC is already Monday in Kolkata"""
        clock = lambda: datetime(2024, 5, 19, 20, 0, tzinfo=timezone.utc)
        start, _ = current_week_window('Asia/Kolkata', clock)

        assert start.date() == date(2024, 5, 20)

    def test_without_zone_uses_server_local_week(self, new_york):
        """Sunday 20:00 UTC is Sunday 16:00 in New York"""
        clock = lambda: datetime(2024, 5, 19, 20, 0, tzinfo=timezone.utc)
        start, end = current_week_window(None, clock)

        assert to_utc(start) == datetime(2024, 5, 13, 4, 0, tzinfo=timezone.utc)
        assert to_utc(end) == datetime(2024, 5, 20, 3, 59, 59, 999999, tzinfo=timezone.utc)


class TestLocalWeekAcrossDst:
    """Bounds of a server-local week that contains a DST change"""

    def test_spring_forward_week(self, new_york):
        """Monday is still EST (-5), Sunday is already EDT (-4)"""
        sunday_noon = datetime(2025, 3, 9, 16, 0, tzinfo=timezone.utc).astimezone()
        start, end = current_week_window(None, lambda: sunday_noon)

        assert to_utc(start) == datetime(2025, 3, 3, 5, 0, tzinfo=timezone.utc)
        assert to_utc(end) == datetime(2025, 3, 10, 3, 59, 59, 999999, tzinfo=timezone.utc)

    def test_fall_back_week(self, new_york):
        """Monday is still EDT (-4), Sunday is already EST (-5)"""
        sunday_noon = datetime(2025, 11, 2, 16, 0, tzinfo=timezone.utc).astimezone()
        start, end = current_week_window(None, lambda: sunday_noon)

        assert to_utc(start) == datetime(2025, 10, 27, 4, 0, tzinfo=timezone.utc)
        assert to_utc(end) == datetime(2025, 11, 3, 4, 59, 59, 999999, tzinfo=timezone.utc)

    def test_monday_first_hour_counts_in_fall_back_week(self, new_york):
        start, end = current_week_window(
            None, lambda: datetime(2025, 11, 2, 16, 0, tzinfo=timezone.utc),
        )
        monday_early = datetime(2025, 10, 27, 4, 30, tzinfo=timezone.utc)

        assert to_utc(start) <= monday_early <= to_utc(end)


class TestDayBounds:

    def test_start_and_end_of_day(self):
        d = date(2024, 1, 1)

        assert start_of_day(d, timezone.utc) == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert end_of_day(d, timezone.utc) == datetime(2024, 1, 1, 23, 59, 59, 999999, tzinfo=timezone.utc)

    def test_local_bounds_are_aware(self):
        assert start_of_day(date(2024, 1, 1)).tzinfo is not None
