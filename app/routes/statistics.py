# app/routes/statistics.py
"""Statistics routes - period totals, per-workplace breakdown and work patterns."""

import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core.shifts import (
    StatsRange,
    aggregate_period,
    analyze_work_patterns,
    earnings_by_month,
    summarize_month,
    summarize_week,
    summarize_year,
)
from app.core.storage import ShiftStore
from app.core.validators import raise_for_validation, validate_date_params
from app.routes.shared import get_store, get_today

router = APIRouter(prefix="/api/statistics", tags=["statistics"])


def _check_range(start: datetime.date, end: datetime.date) -> None:
    if end <= start:
        raise_for_validation("The end date must be after the start date")


@router.get("/range")
async def range_statistics(
    start: datetime.date = Query(...),
    end: datetime.date = Query(...),
    store: ShiftStore = Depends(get_store),
):
    """Totals for the half-open range [start, end)."""
    _check_range(start, end)
    return aggregate_period(start, end, store.list_shifts(start, end), store.list_workplaces())


@router.get("/month/{year}/{month}")
async def month_statistics(year: int, month: int, store: ShiftStore = Depends(get_store)):
    validate_date_params(year, month, None)
    return summarize_month(year, month, store.list_shifts(), store.list_workplaces())


@router.get("/week/{day}")
async def week_statistics(day: datetime.date, store: ShiftStore = Depends(get_store)):
    """The week (Monday to Sunday) containing day."""
    return summarize_week(day, store.list_shifts(), store.list_workplaces())


@router.get("/year/{year}")
async def year_statistics(year: int, store: ShiftStore = Depends(get_store)):
    """Twelve monthly summaries plus year totals and earnings per month."""
    validate_date_params(year, None, None)
    shifts = store.list_shifts()
    workplaces = store.list_workplaces()
    return {
        "summary": summarize_year(year, shifts, workplaces),
        "earnings_by_month": earnings_by_month(year, shifts, workplaces),
    }


@router.get("/patterns")
async def work_patterns(
    start: datetime.date = Query(...),
    end: datetime.date = Query(...),
    store: ShiftStore = Depends(get_store),
):
    _check_range(start, end)
    return analyze_work_patterns(start, end, store.list_shifts(start, end), store.list_workplaces())


@router.get("/preset/{name}")
async def preset_statistics(
    name: str,
    today: datetime.date = Depends(get_today),
    store: ShiftStore = Depends(get_store),
):
    """Totals and patterns for a named range (this_week, this_month, last_month, ...)."""
    try:
        preset = StatsRange(name)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown range: {name}") from e

    start, end = preset.date_range(today)
    shifts = store.list_shifts(start, end)
    workplaces = store.list_workplaces()
    return {
        "range": preset.value,
        "stats": aggregate_period(start, end, shifts, workplaces),
        "patterns": analyze_work_patterns(start, end, shifts, workplaces),
    }
