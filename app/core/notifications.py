"""
Content for shift reminders and conflict warnings.

Delivery is scheduled outside the app; this module only builds the
title, body and fire time of each notice.
"""

import datetime
import logging
from collections.abc import Iterable

from pydantic import BaseModel

from app.core.config import CONFLICT_WARNING_HOUR, DEFAULT_REMINDER_HOURS
from app.core.constants import BADGE_HOLIDAY, BADGE_NIGHT
from app.core.helpers import build_workplace_index, workplace_display
from app.core.models import Shift, ShiftOverlap, Workplace
from app.core.shifts.overlap import group_shifts_by_day
from app.core.shifts.wages import is_holiday, is_night_shift

logger = logging.getLogger(__name__)


class Notice(BaseModel):
    """En schemalagd notis."""
    key: str
    title: str
    body: str
    fire_at: datetime.datetime
    shift_ids: list[str] = []


def _reminder_title(hours_before: int) -> str:
    if hours_before == 24:
        return "Shift tomorrow"
    if hours_before == 1:
        return "Shift starting soon"
    return f"Shift in {hours_before} hours"


def compose_shift_reminder(
    shift: Shift,
    workplaces: Iterable[Workplace],
    hours_before: int,
) -> Notice:
    """
    Bygger en påminnelse för ett pass.

    Texten är "<arbetsplats> - HH:MM-HH:MM", följd av anteckningen och
    tilläggsmärken om de finns.
    """
    display = workplace_display(shift, workplaces)
    lines = [f"{display['name']} - {shift.time_display}"]

    if shift.memo:
        lines.append(shift.memo)

    badges = []
    if is_night_shift(shift):
        badges.append(BADGE_NIGHT)
    if is_holiday(shift):
        badges.append(BADGE_HOLIDAY)
    if badges:
        lines.append(" / ".join(badges))

    return Notice(
        key=f"shift-{shift.id}-{hours_before}h",
        title=_reminder_title(hours_before),
        body="\n".join(lines),
        fire_at=shift.start_time - datetime.timedelta(hours=hours_before),
        shift_ids=[shift.id],
    )


def reminder_times(
    shift: Shift,
    hours_before: Iterable[int],
    now: datetime.datetime,
) -> list[tuple[int, datetime.datetime]]:
    """(timmar, tidpunkt) för varje påminnelse som ännu inte passerats."""
    result = []
    for hours in hours_before:
        fire_at = shift.start_time - datetime.timedelta(hours=hours)
        if fire_at > now:
            result.append((hours, fire_at))
    return result


def build_shift_reminders(
    shifts: Iterable[Shift],
    workplaces: Iterable[Workplace],
    now: datetime.datetime,
    hours_before: Iterable[int] = DEFAULT_REMINDER_HOURS,
) -> list[Notice]:
    """Alla kommande påminnelser, sorterade på tidpunkt."""
    workplaces = list(workplaces)
    hours_before = tuple(hours_before)

    notices = []
    for shift in shifts:
        for hours, _ in reminder_times(shift, hours_before, now):
            notices.append(compose_shift_reminder(shift, workplaces, hours))

    notices.sort(key=lambda n: n.fire_at)
    return notices


def compose_conflict_warning(
    shifts: list[Shift],
    workplaces: Iterable[Workplace],
    now: datetime.datetime,
) -> Notice | None:
    """
    Varning kvällen före en dag med krockande pass.

    Returnerar None om färre än två pass anges eller om tidpunkten
    redan har passerats.
    """
    if len(shifts) < 2:
        return None

    day = shifts[0].date
    tzinfo = shifts[0].start_time.tzinfo
    fire_at = datetime.datetime.combine(
        day - datetime.timedelta(days=1),
        datetime.time(CONFLICT_WARNING_HOUR, 0),
        tzinfo=tzinfo,
    )
    if fire_at <= now:
        return None

    workplaces = list(workplaces)
    ordered = sorted(shifts, key=lambda s: s.start_time)
    lines = [f"{workplace_display(s, workplaces)['name']} {s.time_display}" for s in ordered]

    return Notice(
        key=f"conflict-{day.isoformat()}",
        title="Overlapping shifts tomorrow",
        body="\n".join(lines),
        fire_at=fire_at,
        shift_ids=[s.id for s in ordered],
    )


def build_conflict_warnings(
    overlaps: Iterable[ShiftOverlap],
    workplaces: Iterable[Workplace],
    now: datetime.datetime,
) -> list[Notice]:
    """En varning per dag som har minst en krock."""
    index = build_workplace_index(workplaces)

    involved: dict[str, Shift] = {}
    for overlap in overlaps:
        if overlap.has_conflict:
            involved[overlap.shift1.id] = overlap.shift1
            involved[overlap.shift2.id] = overlap.shift2

    notices = []
    for day, day_shifts in sorted(group_shifts_by_day(involved.values()).items()):
        notice = compose_conflict_warning(day_shifts, index.values(), now)
        if notice is not None:
            notices.append(notice)
        else:
            logger.debug("No conflict warning for %s", day)

    return notices
