"""ScheduleData: Vollständiger Eingabedatensatz + Machbarkeits-Check (Pydantic v2)."""

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from config.schema import DayMode, PlannerConfig
from models.course import Course
from models.room import Room
from models.teacher import Teacher


class CourseDefinition(BaseModel):
    """Kursdefinition im Datensatz; die Lehrkraft wird per Name referenziert."""

    name: str
    total_hours: int = Field(gt=0)
    teacher: str
    course_type: Optional[str] = None


class FeasibilityReport(BaseModel):
    """Ergebnis des Machbarkeits-Checks."""

    is_feasible: bool
    errors: list[str]      # Kritische Probleme (Lauf nicht sinnvoll)
    warnings: list[str]    # Hinweise (Kurse bleiben evtl. unvollständig)

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel

        console = Console()
        if self.is_feasible:
            status = "[bold green]✓ PLANBAR[/bold green]"
        else:
            status = "[bold red]✗ NICHT PLANBAR[/bold red]"

        lines = [status]
        if self.errors:
            lines.append("\n[red bold]Fehler (kritisch):[/red bold]")
            for e in self.errors:
                lines.append(f"  [red]• {e}[/red]")
        if self.warnings:
            lines.append("\n[yellow bold]Warnungen:[/yellow bold]")
            for w in self.warnings:
                lines.append(f"  [yellow]• {w}[/yellow]")
        if not self.errors and not self.warnings:
            lines.append("[dim]Keine Probleme gefunden.[/dim]")

        console.print(Panel("\n".join(lines), title="Machbarkeits-Check", border_style="cyan"))


@dataclass
class Roster:
    """Laufzeit-Objekte für genau einen Allokationslauf (frische Ledger)."""

    teachers: dict[str, Teacher]
    rooms: list[Room]
    courses: list[Course]


class ScheduleData(BaseModel):
    """Vollständiger Datensatz: Lehrkräfte, Räume, Kurse, Konfiguration."""

    teachers: list[Teacher]
    rooms: list[Room]
    courses: list[CourseDefinition]
    config: PlannerConfig
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    data_version: str = "1.0"

    # ─── Übersicht ───

    def summary(self) -> str:
        """Kurze Übersicht über den Datensatz."""
        total_need = sum(c.total_hours for c in self.courses)
        lines = [
            f"Einrichtung: {self.config.institution_name}",
            f"Lehrkräfte: {len(self.teachers)}",
            f"Kurse: {len(self.courses)} ({total_need}h Gesamtbedarf)",
            f"Räume: {len(self.rooms)}",
            f"Slots pro Tag: {len(self.config.time_grid.time_slots)}",
            f"Tagesquelle: {self.config.allocator.day_mode.value}"
            + (f" ({self.config.allocator.active_period})"
               if self.config.allocator.day_mode == DayMode.PERIOD else ""),
        ]
        return "\n".join(lines)

    # ─── Laufzeit-Objekte ───

    def build_roster(self) -> Roster:
        """Erzeugt frische Teacher/Room/Course-Objekte für einen Lauf.

        Kurse derselben Lehrkraft teilen sich dasselbe Teacher-Objekt.
        Unbekannte Lehrkräfte sind ein Vertragsbruch des Aufrufers → KeyError.
        """
        teachers = {t.name: t.fresh_copy() for t in self.teachers}
        rooms = [r.fresh_copy() for r in self.rooms]
        courses = []
        for cdef in self.courses:
            if cdef.teacher not in teachers:
                raise KeyError(
                    f"Kurs '{cdef.name}' verweist auf unbekannte Lehrkraft '{cdef.teacher}'"
                )
            courses.append(Course(
                name=cdef.name,
                total_hours=cdef.total_hours,
                teacher=teachers[cdef.teacher],
                course_type=cdef.course_type,
            ))
        return Roster(teachers=teachers, rooms=rooms, courses=courses)

    # ─── Machbarkeits-Check ───

    def validate_feasibility(self) -> FeasibilityReport:
        """Prüft den Datensatz vor einem Lauf.

        Prüfungen:
        1. Eindeutige Namen (Lehrkräfte, Räume, Kurse)
        2. Jeder Kurs verweist auf eine bekannte Lehrkraft
        3. Räume und Tage vorhanden (sonst leerer Kandidatenraum)
        4. Zeitraum vollständig (im Modus 'period')
        5. Pro Lehrkraft: Bedarf ≤ Slots × Tage × Dauer
        """
        errors: list[str] = []
        warnings: list[str] = []

        for label, names in (
            ("Lehrkraft", [t.name for t in self.teachers]),
            ("Raum", [r.name for r in self.rooms]),
            ("Kurs", [c.name for c in self.courses]),
        ):
            seen: set[str] = set()
            for n in names:
                if n in seen:
                    errors.append(f"{label} '{n}' ist mehrfach definiert.")
                seen.add(n)

        teacher_map = {t.name: t for t in self.teachers}
        for cdef in self.courses:
            if cdef.teacher not in teacher_map:
                errors.append(
                    f"Kurs '{cdef.name}': Lehrkraft '{cdef.teacher}' existiert nicht."
                )

        if not self.rooms:
            errors.append("Keine Räume definiert – es kann nichts geplant werden.")

        alloc = self.config.allocator
        tg = self.config.time_grid
        if alloc.day_mode == DayMode.PERIOD:
            period = self.config.get_period()
            if period is None:
                errors.append(f"Zeitraum '{alloc.active_period}' ist nicht definiert.")
                num_days = 0
            elif not period.is_complete:
                errors.append(f"Zeitraum '{alloc.active_period}' ohne Start oder Ende.")
                num_days = 0
            else:
                num_days = max(0, (period.end - period.start).days + 1)
                if num_days == 0:
                    warnings.append(
                        f"Zeitraum '{alloc.active_period}' endet vor seinem Beginn."
                    )
        else:
            num_days = len(tg.day_names)
            if num_days == 0:
                errors.append("Keine erlaubten Tage konfiguriert.")

        # Kapazität pro Lehrkraft (ohne Raumkonkurrenz)
        need: dict[str, int] = {}
        for cdef in self.courses:
            need[cdef.teacher] = need.get(cdef.teacher, 0) + cdef.total_hours

        slots = len(tg.time_slots)
        for name, hours in need.items():
            teacher = teacher_map.get(name)
            if teacher is None:
                continue
            if teacher.max_hours_per_week == 0:
                warnings.append(
                    f"Lehrkraft {name}: max_hours_per_week = 0 – Kurse bleiben ungeplant."
                )
                continue
            # Tageslimit greift pro Tag; pro Tag werden höchstens so viele
            # Veranstaltungen gebucht, bis die Tageslast das Limit erreicht.
            per_day_events = min(
                slots, -(-teacher.max_hours_per_week // alloc.event_duration)
            )
            capacity = per_day_events * alloc.event_duration * num_days
            if capacity < hours:
                warnings.append(
                    f"Lehrkraft {name}: Bedarf {hours}h > erreichbare Kapazität "
                    f"{capacity}h – mindestens ein Kurs bleibt unvollständig."
                )

        return FeasibilityReport(
            is_feasible=len(errors) == 0,
            errors=errors,
            warnings=warnings,
        )

    # ─── Persistenz ────────────────────────────────────────────────────────

    def save_json(self, path: Path) -> None:
        """Speichert den kompletten Datensatz als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        now = datetime.now(timezone.utc)
        updated = self.model_copy(update={
            "modified_at": now,
            "created_at": self.created_at or now,
        })
        with open(path, "w", encoding="utf-8") as f:
            f.write(updated.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "ScheduleData":
        """Lädt einen Datensatz aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
