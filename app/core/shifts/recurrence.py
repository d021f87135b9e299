"""Expansion of recurring shifts into concrete shifts."""

import datetime
import logging
import uuid

from app.core.config import MAX_RECURRING_OCCURRENCES
from app.core.models import RecurrenceType, Shift

from .period import add_months

logger = logging.getLogger(__name__)

_STEP_DAYS: dict[RecurrenceType, int] = {
    RecurrenceType.DAILY: 1,
    RecurrenceType.WEEKLY: 7,
    RecurrenceType.BI_WEEKLY: 14,
}


def occurrence_dates(
    first: datetime.date,
    recurrence_type: RecurrenceType,
    end_date: datetime.date,
) -> list[datetime.date]:
    """
    Datum för varje förekomst från first till och med end_date.

    Månadsupprepning utgår alltid från first (31 jan -> 28 feb -> 31 mar).
    """
    dates: list[datetime.date] = []
    index = 0
    current = first

    while current <= end_date:
        if len(dates) >= MAX_RECURRING_OCCURRENCES:
            logger.warning(
                "Recurrence from %s to %s capped at %d occurrences",
                first,
                end_date,
                MAX_RECURRING_OCCURRENCES,
            )
            break

        dates.append(current)
        index += 1

        if recurrence_type == RecurrenceType.MONTHLY:
            current = add_months(first, index)
        else:
            current = first + datetime.timedelta(days=_STEP_DAYS[recurrence_type] * index)

    return dates


def expand_recurrence(shift: Shift) -> list[Shift]:
    """
    Materialiserar ett återkommande pass till ett konkret pass per förekomst.

    Klockslag och längd behålls, även för pass över midnatt. Varje förekomst
    får ett nytt id. Utan upprepning returneras passet självt.

    Args:
        shift: Passet som skapas, med recurrence satt

    Returns:
        Lista av konkreta pass, sorterad på datum
    """
    if shift.recurrence is None:
        return [shift]

    tzinfo = shift.start_time.tzinfo
    start_offset = shift.start_time - datetime.datetime.combine(shift.date, datetime.time(0, 0), tzinfo=tzinfo)
    duration = shift.end_time - shift.start_time

    occurrences: list[Shift] = []
    for day in occurrence_dates(shift.date, shift.recurrence.type, shift.recurrence.end_date):
        start = datetime.datetime.combine(day, datetime.time(0, 0), tzinfo=tzinfo) + start_offset
        occurrences.append(
            shift.model_copy(
                update={
                    "id": str(uuid.uuid4()),
                    "date": day,
                    "start_time": start,
                    "end_time": start + duration,
                    "actual_start_time": None,
                    "actual_end_time": None,
                    "actual_break_minutes": 0,
                }
            )
        )

    logger.info(
        "Expanded %s recurrence into %d shift(s)",
        shift.recurrence.type.value,
        len(occurrences),
    )
    return occurrences
