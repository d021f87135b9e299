# app/core/constants.py
from typing import Final

# ==========================
# Veckodagsnamn (presentation)
# ==========================

#: Namn på veckodagar, indexerade som datetime.weekday() (0=måndag, 6=söndag).
WEEKDAY_NAMES: Final[tuple[str, ...]] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

#: Antal dagar per vecka.
DAYS_PER_WEEK: Final[int] = 7

#: Antal minuter per timme.
MINUTES_PER_HOUR: Final[int] = 60


# ==========================
# Arbetsplatsfärger
# ==========================

#: Färgpalett för arbetsplatser (hex). Ordningen styr "nästa lediga färg".
COLOR_OPTIONS: Final[tuple[str, ...]] = (
    "#007AFF",  # blå
    "#FF3B30",  # röd
    "#34C759",  # grön
    "#FF9500",  # orange
    "#AF52DE",  # lila
    "#FF2D55",  # rosa
    "#FFCC00",  # gul
    "#32ADE6",  # cyan
    "#00C7BE",  # mint
    "#5856D6",  # indigo
    "#30B0C7",  # teal
    "#A2845E",  # brun
    "#33CC80",
    "#CC4DB3",
    "#E6991A",
)


# ==========================
# Okänd arbetsplats
# ==========================

#: Visningsnamn när ett pass pekar på en arbetsplats som inte finns.
UNKNOWN_WORKPLACE_NAME: Final[str] = "Unknown workplace"

#: Visningsfärg när ett pass pekar på en arbetsplats som inte finns.
UNKNOWN_WORKPLACE_COLOR: Final[str] = "#8E8E93"


# ==========================
# Notisbrickor
# ==========================

#: Bricka i påminnelser för pass som räknas som nattpass.
BADGE_NIGHT: Final[str] = "Night allowance"

#: Bricka i påminnelser för pass på helgdag.
BADGE_HOLIDAY: Final[str] = "Holiday allowance"
