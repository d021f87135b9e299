# tests/test_holidays.py
"""
Unit tests for the national holiday calendar.
"""

import datetime

from app.core.holidays import HolidayCalendar, holidays_for_year, nth_weekday_of_month


class TestNthWeekday:
    """Monday-based holidays."""

    def test_second_monday_of_january_2025(self):
        assert nth_weekday_of_month(2025, 1, 0, 2) == datetime.date(2025, 1, 13)

    def test_month_starting_on_the_weekday(self):
        """1 September 2025 is a Monday, so the third Monday is the 15th."""
        assert nth_weekday_of_month(2025, 9, 0, 3) == datetime.date(2025, 9, 15)


class TestHolidayCalendar:
    """Lookups for fixed-date and Monday holidays."""

    def test_year_2025(self):
        holidays = holidays_for_year(2025)

        assert len(holidays) == 14
        assert holidays[datetime.date(2025, 1, 1)] == "New Year's Day"
        assert holidays[datetime.date(2025, 7, 21)] == "Marine Day"
        assert holidays[datetime.date(2025, 10, 13)] == "Sports Day"
        assert list(holidays) == sorted(holidays)

    def test_is_holiday(self):
        calendar = HolidayCalendar([2025])

        assert calendar.is_holiday(datetime.date(2025, 5, 5)) is True
        assert calendar.is_holiday(datetime.date(2025, 5, 6)) is False
        assert calendar.is_holiday(datetime.datetime(2025, 11, 3, 12, 0)) is True

    def test_holiday_name(self):
        calendar = HolidayCalendar([2025])

        assert calendar.holiday_name(datetime.date(2025, 1, 13)) == "Coming of Age Day"
        assert calendar.holiday_name(datetime.date(2025, 1, 14)) is None

    def test_only_loaded_years_are_known(self):
        calendar = HolidayCalendar([2025])

        assert calendar.is_holiday(datetime.date(2026, 1, 1)) is False
        assert calendar.holidays_for_year(2026) == []
