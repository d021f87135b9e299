"""Working time, night/holiday differentials and earnings per shift."""

from app.core.config import HOLIDAY_WEEKDAYS
from app.core.constants import MINUTES_PER_HOUR
from app.core.models import Shift, ShiftFigures, Workplace
from app.core.time_utils import (
    clamp_interval,
    interval_minutes,
    is_night_hour,
    minutes_between,
    night_window_for,
)


def working_minutes(shift: Shift) -> int:
    """Planerad arbetstid i minuter: passets längd minus rast, aldrig negativ."""
    total = minutes_between(shift.start_time, shift.end_time)
    return max(0, total - shift.break_minutes)


def actual_working_minutes(shift: Shift) -> int:
    """
    Faktisk arbetstid i minuter.

    Används bara när både faktisk start och faktiskt slut finns,
    annars returneras den planerade arbetstiden.
    """
    if shift.actual_start_time is None or shift.actual_end_time is None:
        return working_minutes(shift)

    total = minutes_between(shift.actual_start_time, shift.actual_end_time)
    return max(0, total - shift.actual_break_minutes)


def is_night_shift(shift: Shift) -> bool:
    """
    Grov nattpassflagga på timnivå.

    Sann om starttimmen eller sluttimmen ligger i [22, 24) eller [0, 5).
    Skiljer sig medvetet från night_working_minutes(), som räknar minuter.
    """
    return is_night_hour(shift.start_time.hour) or is_night_hour(shift.end_time.hour)


def night_working_minutes(shift: Shift) -> int:
    """
    Nattminuter: överlapp mellan passet och nattfönstret för passets dag.

    Rasten antas ligga i nattfönstret i första hand, så upp till
    min(rast, nattöverlapp) dras av.
    """
    overlap = clamp_interval(
        (shift.start_time, shift.end_time),
        night_window_for(shift.date, shift.start_time.tzinfo),
    )
    night_minutes = interval_minutes(overlap)
    if night_minutes == 0:
        return 0

    night_break = min(shift.break_minutes, night_minutes)
    return max(0, night_minutes - night_break)


def is_holiday(shift: Shift) -> bool:
    """Förenklad helgregel: passets dag är lördag eller söndag."""
    return shift.date.weekday() in HOLIDAY_WEEKDAYS


def calculate_base_pay(minutes: int, workplace: Workplace) -> int:
    """Grundlön för ett antal minuter, trunkerad mot noll."""
    return int(minutes * workplace.hourly_wage / MINUTES_PER_HOUR)


def calculate_night_pay(night_minutes: int, workplace: Workplace) -> int:
    """Nattillägg: bara differensdelen (rate - 1.0) av timlönen."""
    return int(night_minutes * workplace.hourly_wage * (workplace.night_shift_rate - 1.0) / MINUTES_PER_HOUR)


def calculate_holiday_pay(minutes: int, holiday: bool, workplace: Workplace) -> int:
    """
    Helgtillägg: differensdelen av arbetsplatsens holiday_rate.

    Den konfigurerbara holiday_rate är den kanoniska formeln; ett fast
    påslag på 35 % används inte.
    """
    if not holiday:
        return 0
    return int(minutes * workplace.hourly_wage * (workplace.holiday_rate - 1.0) / MINUTES_PER_HOUR)


def calculate_shift_figures(shift: Shift, workplace: Workplace | None) -> ShiftFigures:
    """
    Räknar fram alla härledda värden för ett pass.

    Args:
        shift: Passet
        workplace: Passets arbetsplats, eller None om den inte finns

    Returns:
        ShiftFigures. Varje penningterm trunkeras för sig innan summering.
        Okänd arbetsplats ger tider men inga pengar.
    """
    minutes = working_minutes(shift)
    night_minutes = night_working_minutes(shift)
    holiday = is_holiday(shift)

    figures = ShiftFigures(
        shift_id=shift.id,
        working_minutes=minutes,
        actual_working_minutes=actual_working_minutes(shift),
        night_working_minutes=night_minutes,
        is_night_shift=is_night_shift(shift),
        is_holiday=holiday,
    )

    if workplace is None:
        return figures

    figures.base_pay = calculate_base_pay(minutes, workplace)
    figures.night_pay = calculate_night_pay(night_minutes, workplace)
    figures.holiday_pay = calculate_holiday_pay(minutes, holiday, workplace)
    figures.transportation_allowance = int(workplace.transportation_allowance)
    figures.earnings = (
        figures.base_pay + figures.night_pay + figures.holiday_pay + figures.transportation_allowance
    )
    return figures


def calculate_shift_earnings(shift: Shift, workplace: Workplace | None) -> int:
    """Förtjänst för ett pass (grund + natt + helg + resersättning)."""
    return calculate_shift_figures(shift, workplace).earnings
