"""Summaries for periods, weeks, months and years."""

import datetime
import logging
from collections.abc import Iterable

from app.core.constants import DAYS_PER_WEEK
from app.core.helpers import build_workplace_index
from app.core.models import (
    PeriodStats,
    Shift,
    WeeklyStats,
    WorkPattern,
    Workplace,
    WorkplaceStats,
    YearlyStats,
)

from .period import days_in_range, month_range, week_range
from .wages import calculate_shift_earnings, is_holiday, is_night_shift, working_minutes

logger = logging.getLogger(__name__)


def shifts_in_range(
    shifts: Iterable[Shift],
    start: datetime.date,
    end: datetime.date,
) -> list[Shift]:
    """Pass vars dag ligger i [start, end)."""
    return [s for s in shifts if start <= s.date < end]


def aggregate_period(
    start: datetime.date,
    end: datetime.date,
    shifts: Iterable[Shift],
    workplaces: Iterable[Workplace],
) -> PeriodStats:
    """
    Summerar pass i [start, end) till totaler och per arbetsplats.

    Pass vars arbetsplats inte finns hoppas över helt och räknas inte.

    Args:
        start: Första dag (inklusive)
        end: Sista dag (exklusive)
        shifts: Alla pass
        workplaces: Alla arbetsplatser

    Returns:
        PeriodStats med per_workplace sorterad på förtjänst, högst först
    """
    index = build_workplace_index(workplaces)

    totals = PeriodStats(start=start, end=end)
    by_workplace: dict[str, WorkplaceStats] = {}
    skipped = 0

    for shift in shifts_in_range(shifts, start, end):
        workplace = index.get(shift.workplace_id)
        if workplace is None:
            skipped += 1
            continue

        minutes = working_minutes(shift)
        earnings = calculate_shift_earnings(shift, workplace)

        totals.total_shifts += 1
        totals.total_working_minutes += minutes
        totals.total_earnings += earnings

        # Arbetsplatsstatistik
        stats = by_workplace.get(workplace.id)
        if stats is None:
            stats = WorkplaceStats(workplace=workplace)
            by_workplace[workplace.id] = stats

        stats.shift_count += 1
        stats.working_minutes += minutes
        stats.earnings += earnings

    if skipped:
        logger.debug("Skipped %d shift(s) with unknown workplace in %s..%s", skipped, start, end)

    totals.per_workplace = sorted(by_workplace.values(), key=lambda s: s.earnings, reverse=True)
    return totals


def analyze_work_patterns(
    start: datetime.date,
    end: datetime.date,
    shifts: Iterable[Shift],
    workplaces: Iterable[Workplace],
) -> WorkPattern:
    """
    Arbetsmönster för [start, end).

    - Mest belagda veckodag räknat i antal pass. Veckodagarna gås igenom
      måndag till söndag och första maxvärdet vinner.
    - Snittimmar per kalenderdag i intervallet.
    - Andel nattpass och helgpass i procent av antalet pass.
    """
    index = build_workplace_index(workplaces)
    period_shifts = [s for s in shifts_in_range(shifts, start, end) if s.workplace_id in index]

    if not period_shifts:
        return WorkPattern()

    weekday_counts = [0] * DAYS_PER_WEEK
    night_shifts = 0
    holiday_shifts = 0
    total_minutes = 0

    for shift in period_shifts:
        weekday_counts[shift.date.weekday()] += 1
        total_minutes += working_minutes(shift)

        if is_night_shift(shift):
            night_shifts += 1

        if is_holiday(shift):
            holiday_shifts += 1

    busiest = 0
    for weekday in range(DAYS_PER_WEEK):
        if weekday_counts[weekday] > weekday_counts[busiest]:
            busiest = weekday

    count = len(period_shifts)
    return WorkPattern(
        busiest_weekday=busiest,
        average_hours_per_day=(total_minutes / 60.0) / max(1, days_in_range(start, end)),
        night_shift_rate=night_shifts / count * 100,
        holiday_work_rate=holiday_shifts / count * 100,
    )


def summarize_month(
    year: int,
    month: int,
    shifts: Iterable[Shift],
    workplaces: Iterable[Workplace],
) -> PeriodStats:
    """Månadsöversikt."""
    start, end = month_range(year, month)
    return aggregate_period(start, end, shifts, workplaces)


def summarize_week(
    day: datetime.date,
    shifts: Iterable[Shift],
    workplaces: Iterable[Workplace],
) -> WeeklyStats:
    """Veckoöversikt för veckan som innehåller day."""
    start, end = week_range(day)
    shifts = list(shifts)
    workplaces = list(workplaces)
    index = build_workplace_index(workplaces)

    period = aggregate_period(start, end, shifts, workplaces)
    week_shifts = [s for s in shifts_in_range(shifts, start, end) if s.workplace_id in index]
    week_shifts.sort(key=lambda s: s.start_time)

    return WeeklyStats(
        week_start=start,
        shifts=week_shifts,
        total_working_minutes=period.total_working_minutes,
        total_earnings=period.total_earnings,
    )


def summarize_year(
    year: int,
    shifts: Iterable[Shift],
    workplaces: Iterable[Workplace],
) -> YearlyStats:
    """
    Årsöversikt med en PeriodStats per månad.

    Returns:
        YearlyStats där totalerna är summan av de tolv månaderna
    """
    shifts = list(shifts)
    workplaces = list(workplaces)

    months = [summarize_month(year, month, shifts, workplaces) for month in range(1, 13)]

    return YearlyStats(
        year=year,
        monthly_stats=months,
        total_shifts=sum(m.total_shifts for m in months),
        total_working_minutes=sum(m.total_working_minutes for m in months),
        total_earnings=sum(m.total_earnings for m in months),
    )


def earnings_by_month(
    year: int,
    shifts: Iterable[Shift],
    workplaces: Iterable[Workplace],
) -> dict[int, int]:
    """Förtjänst per månad (1-12) för årsdiagrammet."""
    summary = summarize_year(year, shifts, workplaces)
    return {index + 1: m.total_earnings for index, m in enumerate(summary.monthly_stats)}
