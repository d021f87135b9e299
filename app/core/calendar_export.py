"""Export of shifts to table rows, CSV and iCal."""

import csv
import datetime
import io
from collections.abc import Iterable

from icalendar import Calendar, Event

from app.core.config import DATE_FORMAT_ISO, TIME_FORMAT_HM
from app.core.helpers import build_workplace_index, workplace_display
from app.core.models import Shift, Workplace
from app.core.shifts.wages import calculate_shift_figures

EXPORT_COLUMNS: tuple[str, ...] = (
    "date",
    "workplace",
    "start",
    "end",
    "break_minutes",
    "working_minutes",
    "night_minutes",
    "night_shift",
    "holiday",
    "earnings",
    "confirmed",
    "memo",
)


def build_export_rows(
    shifts: Iterable[Shift],
    workplaces: Iterable[Workplace],
) -> list[dict]:
    """
    En rad per pass med härledda värden, sorterad på starttid.

    Pass med borttagen arbetsplats tas med under platshållarnamnet
    och får förtjänst 0.
    """
    index = build_workplace_index(workplaces)

    rows = []
    for shift in sorted(shifts, key=lambda s: s.start_time):
        figures = calculate_shift_figures(shift, index.get(shift.workplace_id))
        rows.append(
            {
                "date": shift.date.strftime(DATE_FORMAT_ISO),
                "workplace": workplace_display(shift, index)["name"],
                "start": shift.start_time.strftime(TIME_FORMAT_HM),
                "end": shift.end_time.strftime(TIME_FORMAT_HM),
                "break_minutes": shift.break_minutes,
                "working_minutes": figures.working_minutes,
                "night_minutes": figures.night_working_minutes,
                "night_shift": figures.is_night_shift,
                "holiday": figures.is_holiday,
                "earnings": figures.earnings,
                "confirmed": shift.is_confirmed,
                "memo": shift.memo or "",
            }
        )
    return rows


def generate_csv(rows: list[dict]) -> str:
    """CSV med rubrikrad i EXPORT_COLUMNS-ordning."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=EXPORT_COLUMNS, lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()


def generate_ical(
    shifts: Iterable[Shift],
    workplaces: Iterable[Workplace],
    start_date: datetime.date,
    end_date: datetime.date,
) -> str:
    """
    Genererar en iCal-fil för passen i ett intervall.

    Args:
        shifts: Alla pass
        workplaces: Alla arbetsplatser
        start_date: Första datum i intervallet
        end_date: Sista datum i intervallet (inklusive)

    Returns:
        iCal-formaterad sträng
    """
    index = build_workplace_index(workplaces)

    # Skapa kalender
    cal = Calendar()
    cal.add("prodid", "-//Shiftbook//shiftbook.app//")
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("method", "PUBLISH")
    cal.add("x-wr-calname", "Shiftbook")

    in_range = [s for s in shifts if start_date <= s.date <= end_date]
    for shift in sorted(in_range, key=lambda s: s.start_time):
        cal.add_component(_create_shift_event(shift, index))

    return cal.to_ical().decode("utf-8")


def _create_shift_event(shift: Shift, workplaces: dict[str, Workplace]) -> Event:
    """Skapar ett VEVENT för ett pass."""
    workplace = workplaces.get(shift.workplace_id)
    figures = calculate_shift_figures(shift, workplace)

    event = Event()
    event.add("summary", workplace_display(shift, workplaces)["name"])
    event.add("uid", f"{shift.id}@shiftbook")
    event.add("dtstart", shift.start_time)
    event.add("dtend", shift.end_time)

    if workplace is not None and workplace.address:
        event.add("location", workplace.address)

    description_parts = [
        f"Working time: {figures.working_minutes / 60:.1f} hours",
        f"Earnings: {figures.earnings}",
    ]
    if shift.break_minutes:
        description_parts.append(f"Break: {shift.break_minutes} min")
    if shift.memo:
        description_parts.append(shift.memo)

    event.add("description", "\n".join(description_parts))

    # Tidsstämpel för när eventet skapades
    event.add("dtstamp", datetime.datetime.now(datetime.timezone.utc))

    return event
