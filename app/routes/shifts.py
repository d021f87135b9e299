# app/routes/shifts.py
"""Shift routes - CRUD, derived figures and overlap checks."""

import datetime
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core.helpers import build_workplace_index, workplace_display
from app.core.logging_config import LogContext
from app.core.models import Shift, ShiftOverlap
from app.core.shifts import (
    calculate_shift_figures,
    conflicting_shift_ids,
    find_all_overlaps,
    find_overlaps_on,
    shifts_in_range,
    would_overlap,
)
from app.core.storage import ShiftStore
from app.core.time_utils import combine_day_and_times
from app.core.validators import raise_for_validation, validate_shift
from app.routes.shared import ShiftCreate, ShiftUpdate, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/shifts", tags=["shifts"])


def _overlap_payload(overlap: ShiftOverlap) -> dict:
    return {
        "shift1_id": overlap.shift1.id,
        "shift2_id": overlap.shift2.id,
        "date": overlap.shift1.date,
        "overlap_minutes": overlap.overlap_minutes,
        "has_conflict": overlap.has_conflict,
    }


def _resolve_times(payload: ShiftCreate) -> tuple[datetime.datetime | None, datetime.datetime | None]:
    """Start/end from the datetime fields, or built from clock times on the shift's day."""
    if payload.start_time is not None or payload.end_time is not None:
        return payload.start_time, payload.end_time

    if payload.date is None or payload.start_clock is None or payload.end_clock is None:
        return None, None

    try:
        return combine_day_and_times(payload.date, payload.start_clock, payload.end_clock)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e


def _candidate_from(payload: ShiftCreate) -> Shift:
    start_time, end_time = _resolve_times(payload)
    raise_for_validation(
        validate_shift(payload.workplace_id, payload.date, start_time, end_time, payload.break_minutes)
    )
    if payload.recurrence is not None and payload.recurrence.end_date < payload.date:
        raise_for_validation("The repeat end date must not be before the shift date")

    return Shift(
        workplace_id=payload.workplace_id,
        date=payload.date,
        start_time=start_time,
        end_time=end_time,
        break_minutes=payload.break_minutes,
        memo=payload.memo,
        is_confirmed=payload.is_confirmed,
        recurrence=payload.recurrence,
    )


@router.get("")
async def list_shifts(
    start: datetime.date | None = Query(None),
    end: datetime.date | None = Query(None),
    store: ShiftStore = Depends(get_store),
):
    """Shifts ordered by date and start time, optionally limited to [start, end)."""
    return store.list_shifts(start, end)


@router.get("/day/{day}")
async def shifts_for_day(day: datetime.date, store: ShiftStore = Depends(get_store)):
    """A day's shifts with workplace display data, figures and conflict flags."""
    workplaces = store.list_workplaces()
    index = build_workplace_index(workplaces)
    all_shifts = store.list_shifts()

    day_shifts = shifts_in_range(all_shifts, day, day + datetime.timedelta(days=1))
    overlaps = find_overlaps_on(day, day_shifts, workplaces)
    conflicted = conflicting_shift_ids(overlaps)

    return {
        "date": day,
        "shifts": [
            {
                "shift": shift,
                "workplace": workplace_display(shift, index),
                "figures": calculate_shift_figures(shift, index.get(shift.workplace_id)),
                "has_conflict": shift.id in conflicted,
            }
            for shift in sorted(day_shifts, key=lambda s: s.start_time)
        ],
        "overlaps": [_overlap_payload(o) for o in overlaps],
    }


@router.get("/overlaps")
async def list_overlaps(
    start: datetime.date | None = Query(None),
    end: datetime.date | None = Query(None),
    store: ShiftStore = Depends(get_store),
):
    """All conflicting pairs, optionally limited to [start, end)."""
    overlaps = find_all_overlaps(store.list_shifts(start, end), store.list_workplaces())
    return [_overlap_payload(o) for o in overlaps]


@router.post("/overlaps/check")
async def check_overlaps(
    payload: ShiftCreate,
    excluding_id: str | None = Query(None),
    store: ShiftStore = Depends(get_store),
):
    """Conflicts a new or edited shift would cause, without saving it."""
    candidate = _candidate_from(payload)
    overlaps = would_overlap(candidate, store.list_shifts(), store.list_workplaces(), excluding_id=excluding_id)
    return [_overlap_payload(o) for o in overlaps]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_shift(payload: ShiftCreate, store: ShiftStore = Depends(get_store)):
    """
    Create a shift (or one shift per occurrence for a repeat rule).

    Overlaps are returned as warnings; they do not block saving.
    """
    candidate = _candidate_from(payload)
    overlaps = would_overlap(candidate, store.list_shifts(), store.list_workplaces())

    created = store.create_shift(candidate)
    logger.info("Created %d shift(s) from %s", len(created), candidate.date)
    return {"shifts": created, "overlaps": [_overlap_payload(o) for o in overlaps]}


@router.get("/{shift_id}")
async def get_shift(shift_id: str, store: ShiftStore = Depends(get_store)):
    return store.get_shift(shift_id)


@router.get("/{shift_id}/figures")
async def shift_figures(shift_id: str, store: ShiftStore = Depends(get_store)):
    """Working time, night minutes, flags and earnings for one shift."""
    shift = store.get_shift(shift_id)
    index = build_workplace_index(store.list_workplaces())
    return calculate_shift_figures(shift, index.get(shift.workplace_id))


@router.put("/{shift_id}")
async def update_shift(shift_id: str, payload: ShiftUpdate, store: ShiftStore = Depends(get_store)):
    """Edit a shift. The stored version of the same shift never counts as a conflict."""
    current = store.get_shift(shift_id)
    changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None or k == "memo"}
    merged = current.model_copy(update=changes)

    raise_for_validation(
        validate_shift(merged.workplace_id, merged.date, merged.start_time, merged.end_time, merged.break_minutes)
    )

    overlaps = would_overlap(merged, store.list_shifts(), store.list_workplaces(), excluding_id=shift_id)

    with LogContext(shift_id=shift_id):
        updated = store.update_shift(shift_id, **changes)
        logger.info("Updated shift (%d field(s))", len(changes))

    return {"shift": updated, "overlaps": [_overlap_payload(o) for o in overlaps]}


@router.delete("/{shift_id}")
async def delete_shift(shift_id: str, store: ShiftStore = Depends(get_store)):
    store.delete_shift(shift_id)
    return {"deleted": shift_id}
