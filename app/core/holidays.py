"""
National holiday calendar (Japan, approximated).

Fixed-date holidays plus the "happy Monday" holidays. The equinox holidays
need an astronomical calculation and are left out. This calendar is for
display; the earnings rule uses weekends only.
"""

import datetime
from collections.abc import Iterable

#: (month, day, name) for holidays on a fixed date.
FIXED_HOLIDAYS: tuple[tuple[int, int, str], ...] = (
    (1, 1, "New Year's Day"),
    (2, 11, "National Foundation Day"),
    (2, 23, "Emperor's Birthday"),
    (4, 29, "Showa Day"),
    (5, 3, "Constitution Memorial Day"),
    (5, 4, "Greenery Day"),
    (5, 5, "Children's Day"),
    (8, 11, "Mountain Day"),
    (11, 3, "Culture Day"),
    (11, 23, "Labour Thanksgiving Day"),
)

#: (month, n, name) for holidays on the n:th Monday of a month.
MONDAY_HOLIDAYS: tuple[tuple[int, int, str], ...] = (
    (1, 2, "Coming of Age Day"),
    (7, 3, "Marine Day"),
    (9, 3, "Respect for the Aged Day"),
    (10, 2, "Sports Day"),
)


def nth_weekday_of_month(year: int, month: int, weekday: int, n: int) -> datetime.date:
    """Den n:te givna veckodagen (0=måndag) i en månad."""
    first = datetime.date(year, month, 1)
    offset = (weekday - first.weekday()) % 7
    return first + datetime.timedelta(days=offset + (n - 1) * 7)


def holidays_for_year(year: int) -> dict[datetime.date, str]:
    """Årets alla helgdagar, datum -> namn, i datumordning."""
    result: dict[datetime.date, str] = {}

    for month, day, name in FIXED_HOLIDAYS:
        result[datetime.date(year, month, day)] = name

    for month, n, name in MONDAY_HOLIDAYS:
        result[nth_weekday_of_month(year, month, 0, n)] = name

    return dict(sorted(result.items()))


class HolidayCalendar:
    """
    Uppslag av helgdagar för en mängd år.

    Skapas explicit och skickas vidare till den som behöver den.
    """

    def __init__(self, years: Iterable[int]):
        self._holidays: dict[datetime.date, str] = {}
        for year in years:
            self._holidays.update(holidays_for_year(year))

    def is_holiday(self, day: datetime.date) -> bool:
        if isinstance(day, datetime.datetime):
            day = day.date()
        return day in self._holidays

    def holiday_name(self, day: datetime.date) -> str | None:
        if isinstance(day, datetime.datetime):
            day = day.date()
        return self._holidays.get(day)

    def holidays_for_year(self, year: int) -> list[datetime.date]:
        return sorted(d for d in self._holidays if d.year == year)
