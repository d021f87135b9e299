# tests/test_statistics.py
"""
Unit tests for period statistics, work patterns and date ranges.

Sample data (March 2025):
- Mon 10/3 office 09:00-17:00 break 60: 420 min, 7000
- Tue 11/3 deleted workplace: skipped
- Wed 12/3 cafe 10:00-12:00: 120 min, 2400 + 500
- Sat 15/3 office 09:00-17:00 break 60: 420 min, 7000 + 2450 holiday
- Mon 17/3 office 09:00-13:00: 240 min, 4000
"""

import datetime

import pytest

from app.core.shifts import (
    StatsRange,
    add_months,
    aggregate_period,
    analyze_work_patterns,
    calculate_shift_earnings,
    earnings_by_month,
    month_range,
    shifts_in_range,
    summarize_month,
    summarize_week,
    summarize_year,
    week_range,
)


@pytest.fixture
def march_shifts(make_shift, office, cafe):
    return [
        make_shift(datetime.date(2025, 3, 10), "09:00", "17:00", workplace_id=office.id, break_minutes=60),
        make_shift(datetime.date(2025, 3, 11), "09:00", "17:00", workplace_id="deleted"),
        make_shift(datetime.date(2025, 3, 12), "10:00", "12:00", workplace_id=cafe.id),
        make_shift(datetime.date(2025, 3, 15), "09:00", "17:00", workplace_id=office.id, break_minutes=60),
        make_shift(datetime.date(2025, 3, 17), "09:00", "13:00", workplace_id=office.id),
    ]


class TestAggregatePeriod:
    """Totals and per-workplace breakdown."""

    def test_month_totals(self, march_shifts, office, cafe):
        stats = summarize_month(2025, 3, march_shifts, [office, cafe])

        assert stats.start == datetime.date(2025, 3, 1)
        assert stats.end == datetime.date(2025, 4, 1)
        assert stats.total_shifts == 4
        assert stats.total_working_minutes == 1200
        assert stats.total_working_hours == 20.0
        assert stats.total_earnings == 23350

    def test_total_is_sum_of_resolved_shift_earnings(self, march_shifts, office, cafe):
        workplaces = {office.id: office, cafe.id: cafe}
        start, end = month_range(2025, 3)

        stats = aggregate_period(start, end, march_shifts, [office, cafe])

        expected = sum(
            calculate_shift_earnings(s, workplaces[s.workplace_id])
            for s in shifts_in_range(march_shifts, start, end)
            if s.workplace_id in workplaces
        )
        assert stats.total_earnings == expected

    def test_unknown_workplace_is_skipped(self, march_shifts, office, cafe):
        """The shift on the deleted workplace counts nowhere."""
        stats = aggregate_period(
            datetime.date(2025, 3, 11),
            datetime.date(2025, 3, 12),
            march_shifts,
            [office, cafe],
        )

        assert stats.total_shifts == 0
        assert stats.total_earnings == 0
        assert stats.per_workplace == []

    def test_per_workplace_sorted_by_earnings(self, march_shifts, office, cafe):
        stats = summarize_month(2025, 3, march_shifts, [office, cafe])

        assert [w.workplace.id for w in stats.per_workplace] == [office.id, cafe.id]

        office_stats = stats.per_workplace[0]
        assert office_stats.shift_count == 3
        assert office_stats.working_minutes == 1080
        assert office_stats.earnings == 20450
        assert office_stats.average_shift_hours == pytest.approx(6.0)

    def test_range_is_half_open(self, march_shifts, office, cafe):
        stats = aggregate_period(
            datetime.date(2025, 3, 10),
            datetime.date(2025, 3, 12),
            march_shifts,
            [office, cafe],
        )

        assert stats.total_shifts == 1
        assert stats.total_earnings == 7000

    def test_empty_period(self, office):
        stats = summarize_month(2025, 4, [], [office])

        assert stats.total_shifts == 0
        assert stats.total_working_hours == 0.0


class TestWeekAndYear:
    """Week and year summaries."""

    def test_week_summary(self, march_shifts, office, cafe):
        week = summarize_week(datetime.date(2025, 3, 12), march_shifts, [office, cafe])

        assert week.week_start == datetime.date(2025, 3, 10)
        assert [s.date.day for s in week.shifts] == [10, 12, 15]
        assert week.total_working_minutes == 960
        assert week.total_earnings == 19350

    def test_year_summary(self, march_shifts, office, cafe):
        year = summarize_year(2025, march_shifts, [office, cafe])

        assert len(year.monthly_stats) == 12
        assert year.total_shifts == 4
        assert year.total_earnings == 23350
        assert year.average_monthly_earnings == pytest.approx(23350 / 12)

    def test_earnings_by_month(self, march_shifts, office, cafe):
        by_month = earnings_by_month(2025, march_shifts, [office, cafe])

        assert by_month[3] == 23350
        assert sum(by_month.values()) == 23350
        assert sorted(by_month) == list(range(1, 13))


class TestWorkPatterns:
    """Busiest weekday, hours per day and shift shares."""

    def test_patterns_for_march(self, march_shifts, office, cafe):
        start, end = month_range(2025, 3)
        pattern = analyze_work_patterns(start, end, march_shifts, [office, cafe])

        assert pattern.busiest_weekday == 0
        assert pattern.busiest_weekday_name == "Monday"
        assert pattern.average_hours_per_day == pytest.approx(20 / 31)
        assert pattern.night_shift_rate == 0.0
        assert pattern.holiday_work_rate == pytest.approx(25.0)

    def test_tie_goes_to_first_weekday_in_scan_order(self, make_shift, office):
        """One Tuesday and one Friday shift: Tuesday comes first from Monday."""
        shifts = [
            make_shift(datetime.date(2025, 3, 14), "09:00", "17:00"),
            make_shift(datetime.date(2025, 3, 11), "09:00", "17:00"),
        ]
        start, end = week_range(datetime.date(2025, 3, 11))

        pattern = analyze_work_patterns(start, end, shifts, [office])

        assert pattern.busiest_weekday == 1

    def test_night_share(self, make_shift, office):
        shifts = [
            make_shift(datetime.date(2025, 3, 11), "22:00", "06:00"),
            make_shift(datetime.date(2025, 3, 12), "09:00", "17:00"),
        ]
        start, end = week_range(datetime.date(2025, 3, 11))

        pattern = analyze_work_patterns(start, end, shifts, [office])

        assert pattern.night_shift_rate == pytest.approx(50.0)

    def test_no_shifts(self, office):
        start, end = month_range(2025, 3)
        pattern = analyze_work_patterns(start, end, [], [office])

        assert pattern.busiest_weekday is None
        assert pattern.average_hours_per_day == 0.0


class TestDateRanges:
    """Calendar helpers and named statistics ranges."""

    def test_add_months_clamps_to_month_end(self):
        assert add_months(datetime.date(2025, 1, 31), 1) == datetime.date(2025, 2, 28)
        assert add_months(datetime.date(2024, 1, 31), 1) == datetime.date(2024, 2, 29)
        assert add_months(datetime.date(2025, 1, 15), -1) == datetime.date(2024, 12, 15)

    def test_week_starts_on_monday(self):
        assert week_range(datetime.date(2025, 3, 16)) == (
            datetime.date(2025, 3, 10),
            datetime.date(2025, 3, 17),
        )

    @pytest.mark.parametrize(
        "preset,expected",
        [
            (StatsRange.THIS_WEEK, (datetime.date(2025, 3, 10), datetime.date(2025, 3, 17))),
            (StatsRange.THIS_MONTH, (datetime.date(2025, 3, 1), datetime.date(2025, 4, 1))),
            (StatsRange.LAST_MONTH, (datetime.date(2025, 2, 1), datetime.date(2025, 3, 1))),
            (StatsRange.LAST_3_MONTHS, (datetime.date(2024, 12, 12), datetime.date(2025, 3, 13))),
            (StatsRange.LAST_6_MONTHS, (datetime.date(2024, 9, 12), datetime.date(2025, 3, 13))),
            (StatsRange.THIS_YEAR, (datetime.date(2025, 1, 1), datetime.date(2026, 1, 1))),
        ],
    )
    def test_named_ranges(self, preset, expected):
        assert preset.date_range(datetime.date(2025, 3, 12)) == expected

    def test_last_month_in_january(self):
        assert StatsRange.LAST_MONTH.date_range(datetime.date(2025, 1, 20)) == (
            datetime.date(2024, 12, 1),
            datetime.date(2025, 1, 1),
        )
