"""
Time arithmetic: whole minutes, intervals, the night window and clock parsing.
"""

import datetime
import logging
from typing import Any

from app.core.config import NIGHT_END_HOUR, NIGHT_START_HOUR

logger = logging.getLogger(__name__)

Interval = tuple[datetime.datetime, datetime.datetime]


def minutes_between(a: datetime.datetime, b: datetime.datetime) -> int:
    """Hela minuter från a till b, trunkerat mot noll (negativt om b < a)."""
    seconds = (b - a).total_seconds()
    return int(seconds / 60)


def same_day(a: datetime.date, b: datetime.date) -> bool:
    """True om a och b infaller samma kalenderdag.

    Tar både date och datetime.
    """
    day_a = a.date() if isinstance(a, datetime.datetime) else a
    day_b = b.date() if isinstance(b, datetime.datetime) else b
    return day_a == day_b


def clamp_interval(first: Interval, second: Interval) -> Interval | None:
    """Snittet av två intervall, eller None när det är tomt."""
    start = max(first[0], second[0])
    end = min(first[1], second[1])
    if start >= end:
        return None
    return start, end


def interval_minutes(interval: Interval | None) -> int:
    """Intervallets längd i minuter; 0 för ett tomt intervall."""
    if interval is None:
        return 0
    return max(0, minutes_between(interval[0], interval[1]))


def night_window_for(day: datetime.date, tzinfo: datetime.tzinfo | None = None) -> Interval:
    """Nattfönstret [22:00 på day, 05:00 dagen efter)."""
    if isinstance(day, datetime.datetime):
        day = day.date()
    night_start = datetime.datetime.combine(day, datetime.time(NIGHT_START_HOUR, 0), tzinfo=tzinfo)
    night_end = datetime.datetime.combine(
        day + datetime.timedelta(days=1),
        datetime.time(NIGHT_END_HOUR, 0),
        tzinfo=tzinfo,
    )
    return night_start, night_end


def is_night_hour(hour: int) -> bool:
    """True om timmen ligger i [22, 24) eller [0, 5)."""
    return hour >= NIGHT_START_HOUR or hour < NIGHT_END_HOUR


def parse_time_of_day(value: Any, field_name: str = "time") -> datetime.time:
    """Tolkar ett klockslag från ett time-objekt eller en "HH:MM"/"HH:MM:SS"-sträng.

    Loggar och kastar ValueError för tomma, felformaterade eller okända värden.
    """
    if isinstance(value, datetime.time):
        return value

    if isinstance(value, str):
        s = value.strip()
        if not s:
            logger.error("%s is empty string", field_name)
            raise ValueError(f"{field_name} is empty")

        try:
            if len(s.split(":")) == 2:
                return datetime.datetime.strptime(s, "%H:%M").time()
            return datetime.datetime.strptime(s, "%H:%M:%S").time()
        except ValueError as e:
            logger.exception("Failed parsing %s as time string. value=%r", field_name, value)
            raise ValueError(f"Invalid {field_name} format: {value!r}") from e

    logger.error("Unsupported %s type. type=%s value=%r", field_name, type(value).__name__, value)
    raise ValueError(f"Unsupported {field_name} type: {type(value).__name__}")


def combine_day_and_times(
    day: datetime.date,
    start: Any,
    end: Any,
) -> Interval:
    """Bygger start- och sluttid för ett pass angivet som dag plus två klockslag.

    En sluttid före eller lika med starttiden betyder att passet slutar nästa dag.
    """
    start_time = parse_time_of_day(start, "start_time")
    end_time = parse_time_of_day(end, "end_time")

    start_dt = datetime.datetime.combine(day, start_time)
    end_dt = datetime.datetime.combine(day, end_time)

    # Pass över midnatt
    if end_dt <= start_dt:
        end_dt += datetime.timedelta(days=1)

    return start_dt, end_dt
