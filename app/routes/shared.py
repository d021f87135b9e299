# app/routes/shared.py
"""
Shared dependencies and request schemas for route modules.
"""

import datetime

from fastapi import Depends
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from app.core.models import Recurrence
from app.core.storage import ShiftStore
from app.database.database import get_db


def get_store(db: Session = Depends(get_db)) -> ShiftStore:
    """ShiftStore bound to the request's database session."""
    return ShiftStore(db)


def get_now() -> datetime.datetime:
    """Current local time. Overridden in tests."""
    return datetime.datetime.now()


def get_today(now: datetime.datetime = Depends(get_now)) -> datetime.date:
    return now.date()


# ============ Pydantic schemas ============


class WorkplaceCreate(BaseModel):
    name: str | None = None
    color: str | None = None
    hourly_wage: float
    transportation_allowance: float = Field(default=0.0, ge=0)
    address: str | None = None
    travel_time_minutes: int = Field(default=0, ge=0)
    night_shift_rate: float | None = Field(default=None, ge=1.0)
    holiday_rate: float | None = Field(default=None, ge=1.0)


class WorkplaceUpdate(BaseModel):
    name: str | None = None
    color: str | None = None
    hourly_wage: float | None = None
    transportation_allowance: float | None = Field(default=None, ge=0)
    address: str | None = None
    travel_time_minutes: int | None = Field(default=None, ge=0)
    night_shift_rate: float | None = Field(default=None, ge=1.0)
    holiday_rate: float | None = Field(default=None, ge=1.0)


class WorkplaceOrder(BaseModel):
    ids: list[str]


def _wall_clock(value: datetime.datetime | None) -> datetime.datetime | None:
    """
    Drop the UTC offset but keep the entered wall-clock time.

    The database stores times without an offset, so all shifts compare as naive times.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.replace(tzinfo=None)


class ShiftCreate(BaseModel):
    """
    New shift.

    Times are given either as full datetimes (start_time/end_time)
    or as "HH:MM" clock times (start_clock/end_clock) on the shift's day.
    """

    workplace_id: str | None = None
    date: datetime.date | None = None
    start_time: datetime.datetime | None = None
    end_time: datetime.datetime | None = None
    start_clock: str | None = None
    end_clock: str | None = None
    break_minutes: int = 0
    memo: str | None = None
    is_confirmed: bool = False
    recurrence: Recurrence | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def drop_offset(cls, value: datetime.datetime | None) -> datetime.datetime | None:
        return _wall_clock(value)


class ShiftUpdate(BaseModel):
    workplace_id: str | None = None
    date: datetime.date | None = None
    start_time: datetime.datetime | None = None
    end_time: datetime.datetime | None = None
    break_minutes: int | None = None
    memo: str | None = None
    is_confirmed: bool | None = None
    actual_start_time: datetime.datetime | None = None
    actual_end_time: datetime.datetime | None = None
    actual_break_minutes: int | None = Field(default=None, ge=0)

    @field_validator("start_time", "end_time", "actual_start_time", "actual_end_time")
    @classmethod
    def drop_offset(cls, value: datetime.datetime | None) -> datetime.datetime | None:
        return _wall_clock(value)
