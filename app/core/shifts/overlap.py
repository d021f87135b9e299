"""Overlap detection - which shifts on the same day intersect."""

import datetime
import logging
from collections.abc import Iterable

from app.core.helpers import build_workplace_index
from app.core.models import Shift, ShiftOverlap, Workplace
from app.core.time_utils import minutes_between, same_day

logger = logging.getLogger(__name__)


def group_shifts_by_day(shifts: Iterable[Shift]) -> dict[datetime.date, list[Shift]]:
    """Grupperar pass per kalenderdag. Ordningen inom dagen behålls."""
    by_day: dict[datetime.date, list[Shift]] = {}
    for shift in shifts:
        by_day.setdefault(shift.date, []).append(shift)
    return by_day


def travel_time_for(shift: Shift, other: Shift, workplaces: dict[str, Workplace]) -> int:
    """
    Restid som läggs på passets slut när det jämförs med ett annat pass.

    Ingen restid mellan pass på samma arbetsplats. Okänd arbetsplats ger 0.
    """
    if shift.workplace_id == other.workplace_id:
        return 0
    workplace = workplaces.get(shift.workplace_id)
    return workplace.travel_time_minutes if workplace else 0


def compute_overlap(
    a: Shift,
    b: Shift,
    workplaces: Iterable[Workplace] | dict[str, Workplace],
) -> ShiftOverlap:
    """
    Räknar överlapp mellan två pass.

    Paret ordnas kronologiskt (start, slut, id) så att resultatet inte beror
    på argumentordningen. Det tidigare passets slut förlängs med dess egen
    arbetsplats restid om arbetsplatserna skiljer sig.

    Returns:
        ShiftOverlap med shift1/shift2 i anroparens ordning
    """
    index = workplaces if isinstance(workplaces, dict) else build_workplace_index(workplaces)

    first, second = sorted((a, b), key=_chronological_key)

    travel = travel_time_for(first, second, index)
    first_end = first.end_time + datetime.timedelta(minutes=travel)

    overlap_start = max(first.start_time, second.start_time)
    overlap_end = min(first_end, second.end_time)

    if overlap_start < overlap_end:
        return ShiftOverlap(
            shift1=a,
            shift2=b,
            overlap_minutes=minutes_between(overlap_start, overlap_end),
            has_conflict=True,
        )

    return ShiftOverlap(shift1=a, shift2=b, overlap_minutes=0, has_conflict=False)


def find_day_overlaps(
    shifts: list[Shift],
    workplaces: Iterable[Workplace] | dict[str, Workplace],
    excluding_id: str | None = None,
) -> list[ShiftOverlap]:
    """
    Alla krockande par bland en dags pass.

    Args:
        shifts: Passen för en och samma dag
        workplaces: Arbetsplatser för restid
        excluding_id: Pass-id som ska hoppas över (t.ex. passet som redigeras)

    Returns:
        Lista av ShiftOverlap med has_conflict=True
    """
    index = workplaces if isinstance(workplaces, dict) else build_workplace_index(workplaces)
    day_shifts = [s for s in shifts if s.id != excluding_id]

    overlaps: list[ShiftOverlap] = []
    for i in range(len(day_shifts)):
        for j in range(i + 1, len(day_shifts)):
            shift1 = day_shifts[i]
            shift2 = day_shifts[j]

            # Samma pass får aldrig krocka med sig själv
            if shift1.id == shift2.id:
                continue

            overlap = compute_overlap(shift1, shift2, index)
            if overlap.has_conflict:
                overlaps.append(overlap)

    return overlaps


def find_all_overlaps(
    shifts: Iterable[Shift],
    workplaces: Iterable[Workplace],
) -> list[ShiftOverlap]:
    """Krockar i hela passmängden. Pass på olika dagar krockar aldrig."""
    index = build_workplace_index(workplaces)

    overlaps: list[ShiftOverlap] = []
    for day, day_shifts in sorted(group_shifts_by_day(shifts).items()):
        day_overlaps = find_day_overlaps(day_shifts, index)
        if day_overlaps:
            logger.debug("Found %d conflict(s) on %s", len(day_overlaps), day)
        overlaps.extend(day_overlaps)

    return overlaps


def find_overlaps_on(
    day: datetime.date,
    shifts: Iterable[Shift],
    workplaces: Iterable[Workplace],
    excluding_id: str | None = None,
) -> list[ShiftOverlap]:
    """Krockar för en given dag."""
    day_shifts = [s for s in shifts if same_day(s.date, day)]
    return find_day_overlaps(day_shifts, workplaces, excluding_id=excluding_id)


def would_overlap(
    candidate: Shift,
    shifts: Iterable[Shift],
    workplaces: Iterable[Workplace],
    excluding_id: str | None = None,
) -> list[ShiftOverlap]:
    """
    Krockar som ett nytt eller redigerat pass skulle ge.

    Kandidatens eget id (och excluding_id) jämförs aldrig, så ett pass som
    redigeras krockar inte med sin sparade version.
    """
    index = build_workplace_index(workplaces)
    skip = {candidate.id, excluding_id}

    overlaps: list[ShiftOverlap] = []
    for existing in shifts:
        if existing.id in skip or not same_day(existing.date, candidate.date):
            continue

        overlap = compute_overlap(candidate, existing, index)
        if overlap.has_conflict:
            overlaps.append(overlap)

    return overlaps


def conflicting_shift_ids(overlaps: Iterable[ShiftOverlap]) -> set[str]:
    """Id:n för alla pass som ingår i någon krock (för kalendermärkning)."""
    ids: set[str] = set()
    for overlap in overlaps:
        if overlap.has_conflict:
            ids.add(overlap.shift1.id)
            ids.add(overlap.shift2.id)
    return ids


# === Privata hjälpfunktioner ===


def _chronological_key(shift: Shift) -> tuple[datetime.datetime, datetime.datetime, str]:
    return shift.start_time, shift.end_time, shift.id
