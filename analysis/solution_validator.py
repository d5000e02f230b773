"""Post-Run Validierung eines Allokationsergebnisses.

Prüft das fertige Ergebnis auf Verletzungen als Sicherheitsnetz
unabhängig vom Allokator.
"""

from collections import defaultdict
from typing import Literal

from pydantic import BaseModel

from models.schedule_data import ScheduleData
from solver.allocator import AllocationResult


class ValidationViolation(BaseModel):
    """Eine einzelne Verletzung."""

    severity: Literal["error", "warning"]
    constraint: str      # z.B. "room_double_booking"
    description: str
    entity: str          # Kurs / Lehrkraft / Raum


class ValidationReport(BaseModel):
    """Ergebnis der Post-Run Validierung."""

    violations: list[ValidationViolation]
    is_valid: bool       # True wenn keine Errors (Warnings ok)

    def by_constraint(self, constraint: str) -> list[ValidationViolation]:
        return [v for v in self.violations if v.constraint == constraint]

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        errors = [v for v in self.violations if v.severity == "error"]
        warnings = [v for v in self.violations if v.severity == "warning"]

        status = (
            "[bold green]✓ VALIDE[/bold green]"
            if self.is_valid
            else "[bold red]✗ VERLETZUNGEN GEFUNDEN[/bold red]"
        )
        lines = [status, f"Fehler: {len(errors)} | Warnungen: {len(warnings)}"]
        console.print(Panel("\n".join(lines), title="Ergebnis-Validierung", border_style="cyan"))

        if not self.violations:
            console.print("[dim]Keine Verletzungen gefunden.[/dim]")
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=8)
        table.add_column("Constraint", width=24)
        table.add_column("Entität", width=18)
        table.add_column("Beschreibung")

        for v in self.violations:
            color = "red" if v.severity == "error" else "yellow"
            table.add_row(
                f"[{color}]{v.severity.upper()}[/{color}]",
                v.constraint,
                v.entity,
                v.description,
            )
        console.print(table)


class SolutionValidator:
    """Prüft ein AllocationResult gegen den Eingabedatensatz."""

    def validate(self, result: AllocationResult, data: ScheduleData) -> ValidationReport:
        """Führt alle Checks durch und gibt einen ValidationReport zurück."""
        violations: list[ValidationViolation] = []

        violations.extend(self._check_double_booking(result, "room"))
        violations.extend(self._check_double_booking(result, "teacher"))
        violations.extend(self._check_daily_cap(result, data))
        violations.extend(self._check_hour_conservation(result, data))
        violations.extend(self._check_references(result, data))

        has_errors = any(v.severity == "error" for v in violations)
        return ValidationReport(violations=violations, is_valid=not has_errors)

    # ── Einzelne Prüfungen ────────────────────────────────────────────────────

    def _check_double_booking(
        self, result: AllocationResult, attr: Literal["room", "teacher"]
    ) -> list[ValidationViolation]:
        """Ein Raum / eine Lehrkraft darf jedes (Tag, Slot)-Paar nur einmal belegen."""
        seen: dict[tuple, list[str]] = defaultdict(list)
        for p in result.placements:
            seen[(getattr(p, attr), p.day, p.time_slot)].append(p.course)

        violations = []
        for (entity, day, slot), courses in seen.items():
            if len(courses) > 1:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint=f"{attr}_double_booking",
                    entity=entity,
                    description=f"{day} {slot}: gleichzeitig {', '.join(courses)}",
                ))
        return violations

    def _check_daily_cap(
        self, result: AllocationResult, data: ScheduleData
    ) -> list[ValidationViolation]:
        """Vor jeder Buchung muss die Tageslast < max_hours_per_week gewesen sein.

        Die letzte Buchung eines Tages darf das Limit überschreiten
        (Vergleich vor dem Commit) → nur Warnung.
        """
        caps = {t.name: t.max_hours_per_week for t in data.teachers}
        load: dict[tuple[str, str], int] = defaultdict(int)
        violations = []
        overshoot: set[tuple[str, str]] = set()

        for p in result.placements:
            cap = caps.get(p.teacher)
            if cap is None:
                continue
            key = (p.teacher, p.day)
            if load[key] >= cap:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="daily_cap",
                    entity=p.teacher,
                    description=(
                        f"{p.day} {p.time_slot}: gebucht bei Tageslast {load[key]}h "
                        f"(Limit {cap}h)"
                    ),
                ))
            load[key] += p.duration
            if load[key] > cap:
                overshoot.add(key)

        for teacher, day in sorted(overshoot):
            violations.append(ValidationViolation(
                severity="warning",
                constraint="daily_cap_overshoot",
                entity=teacher,
                description=f"{day}: {load[(teacher, day)]}h > Limit {caps[teacher]}h",
            ))
        return violations

    def _check_hour_conservation(
        self, result: AllocationResult, data: ScheduleData
    ) -> list[ValidationViolation]:
        """geplant + offen = Gesamtbedarf; offene Kurse als Warnung."""
        planned: dict[str, int] = defaultdict(int)
        for p in result.placements:
            planned[p.course] += p.duration

        violations = []
        for cdef in data.courses:
            unmet = result.unmet_hours.get(cdef.name, 0)
            if planned[cdef.name] + unmet != cdef.total_hours:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="hour_conservation",
                    entity=cdef.name,
                    description=(
                        f"geplant {planned[cdef.name]}h + offen {unmet}h "
                        f"≠ Bedarf {cdef.total_hours}h"
                    ),
                ))
            elif unmet > 0:
                violations.append(ValidationViolation(
                    severity="warning",
                    constraint="course_incomplete",
                    entity=cdef.name,
                    description=f"{unmet}h von {cdef.total_hours}h nicht geplant",
                ))
        return violations

    def _check_references(
        self, result: AllocationResult, data: ScheduleData
    ) -> list[ValidationViolation]:
        courses = {c.name: c.teacher for c in data.courses}
        rooms = {r.name for r in data.rooms}
        violations = []
        for p in result.placements:
            if p.course not in courses:
                problem = f"unbekannter Kurs '{p.course}'"
            elif courses[p.course] != p.teacher:
                problem = f"Lehrkraft {p.teacher} ist nicht an {p.course} gebunden"
            elif p.room not in rooms:
                problem = f"unbekannter Raum '{p.room}'"
            else:
                continue
            violations.append(ValidationViolation(
                severity="error",
                constraint="unknown_reference",
                entity=p.course,
                description=f"{p.day} {p.time_slot}: {problem}",
            ))
        return violations
