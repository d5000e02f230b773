"""Gemeinsame Hilfsfunktionen für Log-, Konsolen-, Excel- und PDF-Export."""

from collections import defaultdict
from datetime import date
from typing import Optional

from models.placement import Placement

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "Lecture":  "B3D4FF",
    "Seminary": "B3FFB3",
    "Exam":     "FFD4B3",
    "sonstig":  "E0E0E0",
    "free":     "F5F5F5",
    "header":   "4472C4",
}


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Wandelt RRGGBB-String in (r, g, b)-Tupel um."""
    h = hex_color.lstrip("#")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


def get_course_color(course_type: Optional[str]) -> str:
    return COLORS.get(course_type or "", COLORS["sonstig"])


# ─── Raster ───────────────────────────────────────────────────────────────────

def build_grid(
    placements: list[Placement],
    days: list[str],
    time_slots: list[str],
) -> dict[tuple[str, str], list[Placement]]:
    """(Tag, Slot) → Placements; enthält alle Zellen des Rasters."""
    grid: dict[tuple[str, str], list[Placement]] = {
        (d, s): [] for d in days for s in time_slots
    }
    for p in placements:
        grid.setdefault((p.day, p.time_slot), []).append(p)
    return grid


def hours_per_day(placements: list[Placement]) -> dict[str, int]:
    """Summe der Dauern je Tag."""
    result: dict[str, int] = defaultdict(int)
    for p in placements:
        result[p.day] += p.duration
    return dict(result)


def format_placement(p: Placement, show: str = "course") -> str:
    """Zelltext: Kurs + die jeweils nicht implizite Ressource."""
    if show == "teacher":
        return f"{p.course}\n{p.room}"
    if show == "room":
        return f"{p.course}\n{p.teacher}"
    return f"{p.course}\n{p.teacher} / {p.room}"
