# app/routes/notifications.py
"""Notification preview - upcoming reminders and conflict warnings."""

import datetime

from fastapi import APIRouter, Depends

from app.core.notifications import build_conflict_warnings, build_shift_reminders
from app.core.shifts import find_all_overlaps
from app.core.storage import ShiftStore
from app.routes.shared import get_now, get_store

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("/preview")
async def preview_notifications(
    now: datetime.datetime = Depends(get_now),
    store: ShiftStore = Depends(get_store),
):
    """Everything that would be scheduled from now on."""
    shifts = store.list_shifts(start=now.date())
    workplaces = store.list_workplaces()

    return {
        "reminders": build_shift_reminders(shifts, workplaces, now),
        "conflict_warnings": build_conflict_warnings(find_all_overlaps(shifts, workplaces), workplaces, now),
    }
