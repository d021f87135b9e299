"""
Shifts module - working time, earnings, overlaps and statistics.

Re-exports all public functions.
"""

from .overlap import (
    compute_overlap,
    conflicting_shift_ids,
    find_all_overlaps,
    find_day_overlaps,
    find_overlaps_on,
    group_shifts_by_day,
    travel_time_for,
    would_overlap,
)
from .period import (
    StatsRange,
    add_months,
    days_in_range,
    month_range,
    week_range,
    week_start_for,
    year_range,
)
from .recurrence import expand_recurrence, occurrence_dates
from .summary import (
    aggregate_period,
    analyze_work_patterns,
    earnings_by_month,
    shifts_in_range,
    summarize_month,
    summarize_week,
    summarize_year,
)
from .wages import (
    actual_working_minutes,
    calculate_base_pay,
    calculate_holiday_pay,
    calculate_night_pay,
    calculate_shift_earnings,
    calculate_shift_figures,
    is_holiday,
    is_night_shift,
    night_working_minutes,
    working_minutes,
)

__all__ = [
    # Wages
    "working_minutes",
    "actual_working_minutes",
    "night_working_minutes",
    "is_night_shift",
    "is_holiday",
    "calculate_base_pay",
    "calculate_night_pay",
    "calculate_holiday_pay",
    "calculate_shift_figures",
    "calculate_shift_earnings",
    # Overlap
    "group_shifts_by_day",
    "travel_time_for",
    "compute_overlap",
    "find_day_overlaps",
    "find_all_overlaps",
    "find_overlaps_on",
    "would_overlap",
    "conflicting_shift_ids",
    # Period
    "StatsRange",
    "add_months",
    "month_range",
    "week_start_for",
    "week_range",
    "year_range",
    "days_in_range",
    # Summary
    "shifts_in_range",
    "aggregate_period",
    "analyze_work_patterns",
    "summarize_month",
    "summarize_week",
    "summarize_year",
    "earnings_by_month",
    # Recurrence
    "occurrence_dates",
    "expand_recurrence",
]
