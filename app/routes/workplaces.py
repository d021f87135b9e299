# app/routes/workplaces.py
"""Workplace routes - create, edit, reorder and delete workplaces."""

import logging

from fastapi import APIRouter, Depends, status

from app.core.config import DEFAULT_HOLIDAY_RATE, DEFAULT_NIGHT_SHIFT_RATE
from app.core.helpers import contrast_color
from app.core.models import Workplace
from app.core.storage import ShiftStore
from app.core.validators import next_available_color, raise_for_validation, validate_workplace
from app.routes.shared import WorkplaceCreate, WorkplaceOrder, WorkplaceUpdate, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/workplaces", tags=["workplaces"])


def _workplace_payload(workplace: Workplace) -> dict:
    return {**workplace.model_dump(), "text_color": contrast_color(workplace.color)}


@router.get("")
async def list_workplaces(store: ShiftStore = Depends(get_store)):
    """All workplaces in priority order."""
    return [_workplace_payload(w) for w in store.list_workplaces()]


@router.get("/next-color")
async def next_color(store: ShiftStore = Depends(get_store)):
    """First palette color not used by any workplace."""
    return {"color": next_available_color(store.list_workplaces())}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_workplace(payload: WorkplaceCreate, store: ShiftStore = Depends(get_store)):
    workplaces = store.list_workplaces()
    raise_for_validation(validate_workplace(payload.name, payload.hourly_wage, workplaces))

    workplace = Workplace(
        name=payload.name.strip(),
        color=payload.color or next_available_color(workplaces),
        hourly_wage=payload.hourly_wage,
        transportation_allowance=payload.transportation_allowance,
        address=payload.address,
        travel_time_minutes=payload.travel_time_minutes,
        night_shift_rate=payload.night_shift_rate or DEFAULT_NIGHT_SHIFT_RATE,
        holiday_rate=payload.holiday_rate or DEFAULT_HOLIDAY_RATE,
    )
    return _workplace_payload(store.create_workplace(workplace))


@router.post("/reorder")
async def reorder_workplaces(payload: WorkplaceOrder, store: ShiftStore = Depends(get_store)):
    """Set priority from the order of the given ids."""
    return [_workplace_payload(w) for w in store.reorder_workplaces(payload.ids)]


@router.get("/{workplace_id}")
async def get_workplace(workplace_id: str, store: ShiftStore = Depends(get_store)):
    return _workplace_payload(store.get_workplace(workplace_id))


@router.put("/{workplace_id}")
async def update_workplace(
    workplace_id: str,
    payload: WorkplaceUpdate,
    store: ShiftStore = Depends(get_store),
):
    """Edit a workplace. The name must stay unique among the other workplaces."""
    current = store.get_workplace(workplace_id)
    # None betyder "inte ändrat" för fält som inte får vara tomma
    changes = {
        k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None or k == "address"
    }

    name = changes.get("name", current.name)
    hourly_wage = changes.get("hourly_wage", current.hourly_wage)
    raise_for_validation(
        validate_workplace(name, hourly_wage, store.list_workplaces(), excluding_id=workplace_id)
    )

    if "name" in changes:
        changes["name"] = name.strip()

    return _workplace_payload(store.update_workplace(workplace_id, **changes))


@router.delete("/{workplace_id}")
async def delete_workplace(workplace_id: str, store: ShiftStore = Depends(get_store)):
    """Delete a workplace together with all of its shifts."""
    removed = store.delete_workplace(workplace_id)
    return {"deleted": workplace_id, "deleted_shifts": removed}
