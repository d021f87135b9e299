# app/routes/export.py
"""Export routes - CSV and iCal downloads."""

import datetime

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from app.core.calendar_export import build_export_rows, generate_csv, generate_ical
from app.core.shifts import year_range
from app.core.storage import ShiftStore
from app.core.validators import raise_for_validation
from app.routes.shared import get_store, get_today

router = APIRouter(prefix="/api/export", tags=["export"])


def _check_range(start: datetime.date | None, end: datetime.date | None) -> None:
    if start is not None and end is not None and end < start:
        raise_for_validation("The end date must not be before the start date")


@router.get("/csv")
async def export_csv(
    start: datetime.date | None = Query(None),
    end: datetime.date | None = Query(None),
    store: ShiftStore = Depends(get_store),
):
    """All shifts (or those in [start, end], both inclusive) as CSV."""
    _check_range(start, end)
    exclusive_end = end + datetime.timedelta(days=1) if end is not None else None
    rows = build_export_rows(store.list_shifts(start, exclusive_end), store.list_workplaces())

    return Response(
        content=generate_csv(rows),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="shifts.csv"'},
    )


@router.get("/ical")
async def export_ical(
    start: datetime.date | None = Query(None),
    end: datetime.date | None = Query(None),
    today: datetime.date = Depends(get_today),
    store: ShiftStore = Depends(get_store),
):
    """Shifts in [start, end] as an iCal file. Defaults to the current year."""
    _check_range(start, end)
    year_start, year_end = year_range(today.year)
    start = start or year_start
    end = end or year_end - datetime.timedelta(days=1)

    ical_content = generate_ical(store.list_shifts(), store.list_workplaces(), start, end)

    return Response(
        content=ical_content,
        media_type="text/calendar; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="shifts.ics"'},
    )
