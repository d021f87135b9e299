# app/core/config.py

import os
from typing import Final


# ==========================
# Nattfönster och helgregel
# ==========================

#: Timme då nattfönstret börjar (22:00 på passets dag).
NIGHT_START_HOUR: Final[int] = 22

#: Timme då nattfönstret slutar (05:00 dagen efter passets dag).
NIGHT_END_HOUR: Final[int] = 5

#: Veckodagar (datetime.weekday()) som räknas som helgdag i lönemotorn.
#: Förenklad regel: bara lördag och söndag.
HOLIDAY_WEEKDAYS: Final[tuple[int, ...]] = (5, 6)


# ==========================
# Arbetsplatser
# ==========================

#: Högsta tillåtna timlön. Högre värden avvisas av valideringen.
MAX_HOURLY_WAGE: Final[float] = 10000.0

#: Standardmultiplikator för nattillägg.
DEFAULT_NIGHT_SHIFT_RATE: Final[float] = 1.25

#: Standardmultiplikator för helgtillägg.
DEFAULT_HOLIDAY_RATE: Final[float] = 1.35

#: Standardfärg för nya arbetsplatser.
DEFAULT_WORKPLACE_COLOR: Final[str] = "#007AFF"


# ==========================
# Pass
# ==========================

#: Längsta tillåtna pass i minuter (24 timmar).
MAX_SHIFT_MINUTES: Final[int] = 24 * 60

#: Övre gräns för hur många pass en upprepning får skapa.
MAX_RECURRING_OCCURRENCES: Final[int] = 400

#: Index för veckans första dag i Python datetime (0 = måndag).
WEEK_START_WEEKDAY: Final[int] = 0


# ==========================
# Påminnelser
# ==========================

#: Hur många timmar innan passet påminnelser skickas.
DEFAULT_REMINDER_HOURS: Final[tuple[int, ...]] = (24, 1)

#: Klockslag (timme) dagen före en krock då varningen skickas.
CONFLICT_WARNING_HOUR: Final[int] = 20


# ==========================
# Datum och tidformat
# ==========================

#: ISO-format för datumsträngar.
DATE_FORMAT_ISO: Final[str] = "%Y-%m-%d"

#: Format för klockslag i visning och export (till exempel "09:00").
TIME_FORMAT_HM: Final[str] = "%H:%M"


# ==========================
# Miljö
# ==========================

#: Databas-URL för passregistret.
DATABASE_URL: Final[str] = os.getenv("SHIFTBOOK_DATABASE_URL", "sqlite:///./shiftbook.db")

#: Produktionsläge styr loggning, CORS och Sentry.
IS_PRODUCTION: Final[bool] = os.getenv("PRODUCTION", "false").lower() == "true"

#: Applikationsversion (health-endpoint och Sentry-release).
APP_VERSION: Final[str] = "0.1.0"
