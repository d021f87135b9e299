# app/core/helpers.py
"""
Shared helper functions for the engine and route handlers.
"""

from collections.abc import Iterable

from app.core.constants import UNKNOWN_WORKPLACE_COLOR, UNKNOWN_WORKPLACE_NAME
from app.core.models import Shift, Workplace


def contrast_color(hex_color: str) -> str:
    """
    Returnerar '#000' för ljusa bakgrunder, '#fff' för mörka.
    Används som textfärg på arbetsplatsens färgbricka.
    """
    if not hex_color:
        return "#fff"
    h = hex_color.lstrip("#")
    if len(h) == 3:
        h = "".join([c * 2 for c in h])
    try:
        r = int(h[0:2], 16)
        g = int(h[2:4], 16)
        b = int(h[4:6], 16)
    except ValueError:
        return "#fff"
    lum = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return "#000" if lum > 0.5 else "#fff"


def build_workplace_index(workplaces: Iterable[Workplace]) -> dict[str, Workplace]:
    """Arbetsplatser indexerade på id, för upprepade uppslag."""
    return {workplace.id: workplace for workplace in workplaces}


def resolve_workplace(workplace_id: str, workplaces: Iterable[Workplace]) -> Workplace | None:
    """
    Slår upp en arbetsplats på id.

    Ett pass pekar bara löst på sin arbetsplats, så en saknad arbetsplats
    är ett normalt utfall och ger None.
    """
    if isinstance(workplaces, dict):
        return workplaces.get(workplace_id)
    return next((w for w in workplaces if w.id == workplace_id), None)


def workplace_display(shift: Shift, workplaces: Iterable[Workplace]) -> dict[str, str]:
    """
    Namn och färger att visa för passets arbetsplats.

    Faller tillbaka på ett platshållarnamn och grått när arbetsplatsen är borttagen.
    """
    workplace = resolve_workplace(shift.workplace_id, workplaces)
    if workplace is None:
        name, color = UNKNOWN_WORKPLACE_NAME, UNKNOWN_WORKPLACE_COLOR
    else:
        name, color = workplace.name, workplace.color
    return {"name": name, "color": color, "text_color": contrast_color(color)}
