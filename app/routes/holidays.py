# app/routes/holidays.py
"""Holiday calendar routes."""

from fastapi import APIRouter

from app.core.holidays import HolidayCalendar
from app.core.validators import validate_date_params

router = APIRouter(prefix="/api/holidays", tags=["holidays"])


@router.get("/{year}")
async def holidays_for_year(year: int):
    """National holidays of a year, in date order."""
    validate_date_params(year, None, None)
    calendar = HolidayCalendar([year])
    return [{"date": day, "name": calendar.holiday_name(day)} for day in calendar.holidays_for_year(year)]
