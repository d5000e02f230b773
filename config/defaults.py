from datetime import date

from config.schema import (
    AllocatorConfig,
    OutputConfig,
    PeriodDefinition,
    PlannerConfig,
    TimeGridConfig,
)


DEFAULT_TIME_SLOTS = [
    "9:00-10:20",
    "10:30-11:50",
    "12:40-14:00",
    "14:10-15:30",
    "15:40-17:00",
    "17:10-18:30",
    "18:40-20:00",
]

DEFAULT_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]


def default_time_grid() -> TimeGridConfig:
    """Standard-Raster: 7 Slots à 80 Minuten, Montag bis Freitag.

    9:00-10:20 | 10:30-11:50 | ── Mittag ── | 12:40-14:00 | 14:10-15:30 |
    15:40-17:00 | 17:10-18:30 | 18:40-20:00
    """
    return TimeGridConfig(
        time_slots=list(DEFAULT_TIME_SLOTS),
        day_names=list(DEFAULT_DAYS),
    )


def default_periods() -> dict[str, PeriodDefinition]:
    """Semesterabschnitte Dezember 2024: Vorlesung, Seminar, Prüfung."""
    return {
        "Lecture": PeriodDefinition(start=date(2024, 12, 1), end=date(2024, 12, 15)),
        "Seminary": PeriodDefinition(start=date(2024, 12, 16), end=date(2024, 12, 22)),
        "Exam": PeriodDefinition(start=date(2024, 12, 23), end=date(2024, 12, 31)),
    }


def default_planner_config() -> PlannerConfig:
    return PlannerConfig(
        institution_name="Muster-Hochschule",
        time_grid=default_time_grid(),
        periods=default_periods(),
        allocator=AllocatorConfig(),
        output=OutputConfig(),
    )
