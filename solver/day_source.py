"""Tagesquellen für den Allokator: feste Tagesliste oder Kalenderzeitraum."""

from datetime import timedelta
from typing import Optional, Protocol

from config.schema import DayMode, PeriodDefinition, PlannerConfig


class InvalidPeriodError(ValueError):
    """Zeitraum ohne Start- oder Enddatum."""


class DaySource(Protocol):
    def days(self) -> list[str]:
        ...


class FixedDays:
    """Explizite, geordnete Liste von Tagesbezeichnungen."""

    def __init__(self, labels: list[str]) -> None:
        self.labels = list(labels)

    def days(self) -> list[str]:
        return list(self.labels)

    def __repr__(self) -> str:
        return f"FixedDays({self.labels!r})"


class PeriodDays:
    """Alle Kalendertage eines Zeitraums (inklusive), als "YYYY-MM-DD"."""

    def __init__(self, period: Optional[PeriodDefinition], name: Optional[str] = None) -> None:
        self.period = period
        self.name = name

    def days(self) -> list[str]:
        if self.period is None or not self.period.is_complete:
            raise InvalidPeriodError(
                "Invalid period provided. Make sure 'start' and 'end' are defined."
            )
        return expand_period(self.period)

    def __repr__(self) -> str:
        return f"PeriodDays({self.name!r})"


def expand_period(period: PeriodDefinition) -> list[str]:
    """Inklusive Datumsaufzählung start..end; leer wenn end < start."""
    dates: list[str] = []
    current = period.start
    while current <= period.end:
        dates.append(current.isoformat())
        current += timedelta(days=1)
    return dates


def day_source_from_config(config: PlannerConfig, period_name: Optional[str] = None) -> DaySource:
    """Baut die Tagesquelle gemäß allocator.day_mode."""
    if config.allocator.day_mode == DayMode.PERIOD:
        name = period_name or config.allocator.active_period
        return PeriodDays(config.get_period(name), name=name)
    return FixedDays(config.time_grid.day_names)
