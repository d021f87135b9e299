"""Date ranges for months, weeks, years and statistics presets."""

import datetime
import enum

from app.core.config import WEEK_START_WEEKDAY


def add_months(day: datetime.date, months: int) -> datetime.date:
    """
    Lägger till (eller drar av) hela månader.

    Dagen kläms till månadens sista dag om den inte finns (31 jan + 1 = 28/29 feb).
    """
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = _days_in_month(year, month)
    return datetime.date(year, month, min(day.day, last_day))


def month_range(year: int, month: int) -> tuple[datetime.date, datetime.date]:
    """Halvöppet intervall [första dagen, första dagen i nästa månad)."""
    start = datetime.date(year, month, 1)
    return start, add_months(start, 1)


def week_start_for(day: datetime.date, week_start: int = WEEK_START_WEEKDAY) -> datetime.date:
    """Första dagen i veckan som innehåller day."""
    offset = (day.weekday() - week_start) % 7
    return day - datetime.timedelta(days=offset)


def week_range(day: datetime.date, week_start: int = WEEK_START_WEEKDAY) -> tuple[datetime.date, datetime.date]:
    """Halvöppet intervall för veckan som innehåller day."""
    start = week_start_for(day, week_start)
    return start, start + datetime.timedelta(days=7)


def year_range(year: int) -> tuple[datetime.date, datetime.date]:
    """Halvöppet intervall för ett helt år."""
    return datetime.date(year, 1, 1), datetime.date(year + 1, 1, 1)


def days_in_range(start: datetime.date, end: datetime.date) -> int:
    """Antal kalenderdagar i [start, end), aldrig negativt."""
    return max(0, (end - start).days)


class StatsRange(str, enum.Enum):
    """Förvalda statistikperioder."""

    THIS_WEEK = "this_week"
    THIS_MONTH = "this_month"
    LAST_MONTH = "last_month"
    LAST_3_MONTHS = "last_3_months"
    LAST_6_MONTHS = "last_6_months"
    THIS_YEAR = "this_year"

    def date_range(self, today: datetime.date) -> tuple[datetime.date, datetime.date]:
        """
        Halvöppet intervall [start, end) för perioden relativt today.

        De rullande perioderna slutar med today inräknat.
        """
        if self is StatsRange.THIS_WEEK:
            return week_range(today)

        if self is StatsRange.THIS_MONTH:
            return month_range(today.year, today.month)

        if self is StatsRange.LAST_MONTH:
            previous = add_months(today.replace(day=1), -1)
            return month_range(previous.year, previous.month)

        tomorrow = today + datetime.timedelta(days=1)

        if self is StatsRange.LAST_3_MONTHS:
            return add_months(today, -3), tomorrow

        if self is StatsRange.LAST_6_MONTHS:
            return add_months(today, -6), tomorrow

        return year_range(today.year)


def _days_in_month(year: int, month: int) -> int:
    if month == 12:
        next_first = datetime.date(year + 1, 1, 1)
    else:
        next_first = datetime.date(year, month + 1, 1)
    return (next_first - datetime.timedelta(days=1)).day
