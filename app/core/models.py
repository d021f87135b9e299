import datetime
import enum
import uuid

from pydantic import BaseModel, Field, computed_field

from app.core.config import (
    DEFAULT_HOLIDAY_RATE,
    DEFAULT_NIGHT_SHIFT_RATE,
    DEFAULT_WORKPLACE_COLOR,
    TIME_FORMAT_HM,
)
from app.core.constants import MINUTES_PER_HOUR, WEEKDAY_NAMES


def _new_id() -> str:
    return str(uuid.uuid4())


class RecurrenceType(str, enum.Enum):
    """Hur ofta ett återkommande pass upprepas."""

    DAILY = "daily"
    WEEKLY = "weekly"
    BI_WEEKLY = "biWeekly"
    MONTHLY = "monthly"


class Recurrence(BaseModel):
    """Upprepningsregel som anges när passet skapas."""
    type: RecurrenceType
    end_date: datetime.date


class Workplace(BaseModel):
    """Arbetsplats med timlön och tilläggssatser."""
    id: str = Field(default_factory=_new_id)
    name: str
    color: str = DEFAULT_WORKPLACE_COLOR
    hourly_wage: float
    transportation_allowance: float = Field(default=0.0, ge=0)
    address: str | None = None
    priority: int = 0
    travel_time_minutes: int = Field(default=0, ge=0)
    night_shift_rate: float = Field(default=DEFAULT_NIGHT_SHIFT_RATE, ge=1.0)
    holiday_rate: float = Field(default=DEFAULT_HOLIDAY_RATE, ge=1.0)
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.now)


class Shift(BaseModel):
    """Ett konkret pass knutet till en kalenderdag."""
    id: str = Field(default_factory=_new_id)
    workplace_id: str
    date: datetime.date
    start_time: datetime.datetime
    end_time: datetime.datetime
    break_minutes: int = Field(default=0, ge=0)
    memo: str | None = None
    is_confirmed: bool = False
    recurrence: Recurrence | None = None
    actual_start_time: datetime.datetime | None = None
    actual_end_time: datetime.datetime | None = None
    actual_break_minutes: int = Field(default=0, ge=0)
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.now)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.now)

    @computed_field
    @property
    def time_display(self) -> str:
        """Läsbart tidsintervall, t.ex. "09:00-17:00"."""
        return f"{self.start_time.strftime(TIME_FORMAT_HM)}-{self.end_time.strftime(TIME_FORMAT_HM)}"


class ShiftOverlap(BaseModel):
    """Två pass samma dag vars intervall (med restid) överlappar."""
    shift1: Shift
    shift2: Shift
    overlap_minutes: int = 0
    has_conflict: bool = False


class ShiftFigures(BaseModel):
    """Härledda tider och belopp för ett pass."""
    shift_id: str
    working_minutes: int
    actual_working_minutes: int
    night_working_minutes: int
    is_night_shift: bool
    is_holiday: bool
    base_pay: int = 0
    night_pay: int = 0
    holiday_pay: int = 0
    transportation_allowance: int = 0
    earnings: int = 0


class WorkplaceStats(BaseModel):
    """Totaler per arbetsplats inom en period."""
    workplace: Workplace
    shift_count: int = 0
    working_minutes: int = 0
    earnings: int = 0

    @computed_field
    @property
    def working_hours(self) -> float:
        return self.working_minutes / MINUTES_PER_HOUR

    @computed_field
    @property
    def average_shift_hours(self) -> float:
        if self.shift_count <= 0:
            return 0.0
        return self.working_hours / self.shift_count


class PeriodStats(BaseModel):
    """Totaler för ett halvöppet datumintervall [start, end)."""
    start: datetime.date
    end: datetime.date
    total_shifts: int = 0
    total_working_minutes: int = 0
    total_earnings: int = 0
    per_workplace: list[WorkplaceStats] = Field(default_factory=list)

    @computed_field
    @property
    def total_working_hours(self) -> float:
        return self.total_working_minutes / MINUTES_PER_HOUR


class WorkPattern(BaseModel):
    """Arbetsmönster för ett datumintervall."""
    busiest_weekday: int | None = None
    average_hours_per_day: float = 0.0
    night_shift_rate: float = 0.0
    holiday_work_rate: float = 0.0

    @computed_field
    @property
    def busiest_weekday_name(self) -> str | None:
        if self.busiest_weekday is None:
            return None
        return WEEKDAY_NAMES[self.busiest_weekday]


class WeeklyStats(BaseModel):
    """Totaler för en vecka."""
    week_start: datetime.date
    shifts: list[Shift] = Field(default_factory=list)
    total_working_minutes: int = 0
    total_earnings: int = 0

    @computed_field
    @property
    def total_working_hours(self) -> float:
        return self.total_working_minutes / MINUTES_PER_HOUR


class YearlyStats(BaseModel):
    """Totaler för ett år, med en PeriodStats per månad."""
    year: int
    monthly_stats: list[PeriodStats] = Field(default_factory=list)
    total_shifts: int = 0
    total_working_minutes: int = 0
    total_earnings: int = 0

    @computed_field
    @property
    def total_working_hours(self) -> float:
        return self.total_working_minutes / MINUTES_PER_HOUR

    @computed_field
    @property
    def average_monthly_earnings(self) -> float:
        if not self.monthly_stats:
            return 0.0
        return self.total_earnings / len(self.monthly_stats)
