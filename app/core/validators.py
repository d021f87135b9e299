import datetime
from collections.abc import Iterable

from fastapi import HTTPException, status

from app.core.config import MAX_HOURLY_WAGE, MAX_SHIFT_MINUTES
from app.core.constants import COLOR_OPTIONS
from app.core.models import Workplace
from app.core.time_utils import minutes_between

# Felmeddelanden för pass
MSG_WORKPLACE_REQUIRED = "Please select a workplace"
MSG_DATE_REQUIRED = "Please select a date"
MSG_TIMES_REQUIRED = "Please set both a start time and an end time"
MSG_END_BEFORE_START = "The end time must be after the start time"
MSG_SHIFT_TOO_LONG = "The shift is longer than 24 hours"
MSG_NEGATIVE_BREAK = "Break minutes cannot be negative"

# Felmeddelanden för arbetsplatser
MSG_NAME_REQUIRED = "Please enter a workplace name"
MSG_NAME_TAKEN = "This workplace name is already in use"
MSG_WAGE_TOO_LOW = "The hourly wage must be greater than zero"
MSG_WAGE_TOO_HIGH = "The hourly wage is too high, please check it"


def validate_shift(
    workplace_id: str | None,
    date: datetime.date | None,
    start_time: datetime.datetime | None,
    end_time: datetime.datetime | None,
    break_minutes: int = 0,
) -> str | None:
    """
    Kontrollerar passfält innan de sparas.

    Returnerar meddelandet för första regeln som inte uppfylls,
    eller None om passet är giltigt. Inga undantag kastas.
    """
    if not workplace_id:
        return MSG_WORKPLACE_REQUIRED

    if date is None:
        return MSG_DATE_REQUIRED

    if start_time is None or end_time is None:
        return MSG_TIMES_REQUIRED

    if start_time >= end_time:
        return MSG_END_BEFORE_START

    if minutes_between(start_time, end_time) > MAX_SHIFT_MINUTES:
        return MSG_SHIFT_TOO_LONG

    if break_minutes < 0:
        return MSG_NEGATIVE_BREAK

    return None


def is_name_available(
    name: str,
    workplaces: Iterable[Workplace],
    excluding_id: str | None = None,
) -> bool:
    """Namnet är ledigt om ingen annan arbetsplats har det (skiftlägesokänsligt)."""
    wanted = name.strip().lower()
    return not any(w.id != excluding_id and w.name.strip().lower() == wanted for w in workplaces)


def validate_workplace(
    name: str | None,
    hourly_wage: float,
    workplaces: Iterable[Workplace],
    excluding_id: str | None = None,
) -> str | None:
    """
    Kontrollerar arbetsplatsfält innan de sparas.

    - Namn får inte vara tomt efter trimning
    - Namn måste vara unikt (egen arbetsplats undantagen vid redigering)
    - Timlön måste ligga i (0, 10000]
    """
    if name is None or not name.strip():
        return MSG_NAME_REQUIRED

    if not is_name_available(name, workplaces, excluding_id):
        return MSG_NAME_TAKEN

    if hourly_wage <= 0.0:
        return MSG_WAGE_TOO_LOW

    if hourly_wage > MAX_HOURLY_WAGE:
        return MSG_WAGE_TOO_HIGH

    return None


def is_color_available(
    color: str,
    workplaces: Iterable[Workplace],
    excluding_id: str | None = None,
) -> bool:
    """Färgen är ledig om ingen annan arbetsplats använder den."""
    wanted = color.upper()
    return not any(w.id != excluding_id and w.color.upper() == wanted for w in workplaces)


def next_available_color(workplaces: Iterable[Workplace]) -> str:
    """
    Första färgen i paletten som ingen arbetsplats använder.

    När alla färger är upptagna roterar paletten efter antalet arbetsplatser.
    """
    workplaces = list(workplaces)
    for color in COLOR_OPTIONS:
        if is_color_available(color, workplaces):
            return color
    return COLOR_OPTIONS[len(workplaces) % len(COLOR_OPTIONS)]


def raise_for_validation(message: str | None) -> None:
    """Översätter ett valideringsmeddelande till HTTP 422."""
    if message:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=message,
        )


def validate_date_params(
    year: int,
    month: int | None,
    day: int | None,
) -> datetime.date | None:
    """
    Validerar att ett givet datum är giltigt.

    - Om både month och day är satta: validera genom att skapa ett datum.
      Returnerar datetime.date om det lyckas.
    - Om enbart year + month: validera att year/month är giltigt genom att skapa dag 1.
      Returnerar None (anroparen bryr sig inte om själva datumet).
    - Om endast year: validera att året ligger inom datumets gränser.
    - Ogiltiga kombinationer eller värden ger HTTP 400.
    """
    try:
        if month is not None and day is not None:
            # Fullt datum, validera och returnera
            return datetime.date(year, month, day)

        if month is not None and day is None:
            # Validera månad (genom att testa dag 1)
            datetime.date(year, month, 1)
            return None

        if month is None and day is None:
            # year + 1 används av årsintervallet
            datetime.date(year + 1, 1, 1)
            return None

        # month är None men day är satt -> orimlig kombination
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid date parameter combination",
        )
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid date",
        )
