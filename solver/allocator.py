"""Greedy-Allokator für Lehrveranstaltungen.

Ablauf pro Kurs (in Eingabereihenfolge), solange Reststunden > 0:
  1. Kandidatenraum: Tag × Slot × Raum (tagweise, dann Slot, dann Raum)
  2. Kandidaten mit nicht verfügbarer Lehrkraft verwerfen (ohne Bewertung),
     ebenso belegte Räume, außer allow_room_overlap ist gesetzt
  3. Rest bewerten; nur ein echt höherer Wert ersetzt den Besten
     → bei Gleichstand gewinnt der zuerst gesehene Kandidat
  4. Besten Kandidaten buchen (Schedule, Kurs, Raum, Lehrkraft)
  5. Kein Kandidat → Fehlermeldung, Kurs bleibt unvollständig

Kein Backtracking: einmal gebuchte Slots werden nie zurückgenommen.
"""

import logging
from pathlib import Path
from typing import NamedTuple, Optional

from pydantic import BaseModel

from config.schema import AvailabilityGranularity, PlannerConfig, ScoringWeights
from models.course import Course
from models.placement import Placement
from models.room import Room
from models.schedule import Schedule
from solver.day_source import DaySource, InvalidPeriodError, day_source_from_config
from solver.scoring import score_candidate

logger = logging.getLogger(__name__)


# ─── Ergebnis-Modell ──────────────────────────────────────────────────────────

class AllocationResult(BaseModel):
    """Ergebnis eines Allokationslaufs."""

    placements: list[Placement]
    messages: list[str]
    unmet_hours: dict[str, int]   # Kurs → ungeplante Reststunden (nur > 0)
    days: list[str]
    time_slots: list[str]
    period: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return not self.unmet_hours

    def get_course_schedule(self, course_name: str) -> list[Placement]:
        return [p for p in self.placements if p.course == course_name]

    def get_teacher_schedule(self, teacher_name: str) -> list[Placement]:
        return [p for p in self.placements if p.teacher == teacher_name]

    def get_room_schedule(self, room_name: str) -> list[Placement]:
        return [p for p in self.placements if p.room == room_name]

    def save_json(self, path: Path) -> None:
        """Speichert das Ergebnis als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "AllocationResult":
        """Lädt ein gespeichertes Ergebnis aus JSON."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Ergebnis nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())


class _Candidate(NamedTuple):
    day: str
    time_slot: str
    room: Room
    score: int


# ─── Allokator ────────────────────────────────────────────────────────────────

class GreedyAllocator:
    """Greedy-Zuweisung von Kursen zu (Tag, Slot, Raum).

    Verwendung:
        allocator = GreedyAllocator.from_config(config)
        result = allocator.allocate(roster.courses, roster.rooms)

    Die übergebenen Course/Teacher/Room-Objekte werden verändert; für jeden
    Lauf frische Objekte verwenden (ScheduleData.build_roster()).
    """

    def __init__(
        self,
        time_slots: list[str],
        day_source: DaySource,
        granularity: AvailabilityGranularity = AvailabilityGranularity.SLOT,
        weights: Optional[ScoringWeights] = None,
        event_duration: int = 2,
        report_discarded: bool = False,
        allow_room_overlap: bool = False,
        detailed_messages: bool = False,
    ) -> None:
        self.time_slots = list(time_slots)
        self.day_source = day_source
        self.granularity = granularity
        self.weights = weights or ScoringWeights()
        self.event_duration = event_duration
        self.report_discarded = report_discarded
        self.allow_room_overlap = allow_room_overlap
        self.detailed_messages = detailed_messages
        self.schedule: Optional[Schedule] = None

    @classmethod
    def from_config(cls, config: PlannerConfig, period_name: Optional[str] = None) -> "GreedyAllocator":
        alloc = config.allocator
        return cls(
            time_slots=config.time_grid.time_slots,
            day_source=day_source_from_config(config, period_name),
            granularity=alloc.granularity,
            weights=alloc.weights,
            event_duration=alloc.event_duration,
            report_discarded=alloc.report_discarded,
            allow_room_overlap=alloc.allow_room_overlap,
            detailed_messages=alloc.detailed_messages,
        )

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def allocate(self, courses: list[Course], rooms: list[Room]) -> AllocationResult:
        """Plant alle Kurse nacheinander und gibt Placements + Meldungen zurück."""
        messages: list[str] = []
        period = getattr(self.day_source, "name", None)

        try:
            days = self.day_source.days()
        except InvalidPeriodError as e:
            logger.error(str(e))
            messages.append(str(e))
            self.schedule = Schedule(time_slots=self.time_slots, days=[])
            return self._build_result(courses, messages, period)

        logger.info(
            f"Allokation: {len(courses)} Kurse, {len(rooms)} Räume, "
            f"{len(days)} Tage × {len(self.time_slots)} Slots"
        )
        self.schedule = Schedule(time_slots=self.time_slots, days=days)

        for course in courses:
            logger.debug(f"Kurs: {course.name} (Typ: {course.course_type})")
            while course.remaining_hours > 0:
                logger.debug(f"  Reststunden {course.name}: {course.remaining_hours}")
                best = self._find_best(course, days, rooms, messages)
                if best is None:
                    error = f"Could not find a slot for {course.name}"
                    logger.warning(error)
                    messages.append(error)
                    break
                messages.append(self._commit(course, best))

        return self._build_result(courses, messages, period)

    # ─── Suche ────────────────────────────────────────────────────────────────

    def _find_best(
        self,
        course: Course,
        days: list[str],
        rooms: list[Room],
        messages: list[str],
    ) -> Optional[_Candidate]:
        teacher = course.teacher
        best: Optional[_Candidate] = None

        for day in days:
            for time_slot in self.time_slots:
                for room in rooms:
                    if not teacher.is_available(day, time_slot):
                        if self.report_discarded:
                            messages.append(
                                f"Teacher {teacher.name} is not available on {day} at {time_slot}."
                            )
                        continue
                    if not self.allow_room_overlap and not room.is_available(day, time_slot):
                        continue

                    score = score_candidate(
                        course, day, time_slot, room, teacher,
                        weights=self.weights, granularity=self.granularity,
                    )
                    logger.debug(
                        f"    {course.name} | {day} {time_slot} | {room.name} → {score}"
                    )
                    if best is None or score > best.score:
                        best = _Candidate(day, time_slot, room, score)

        return best

    # ─── Commit ───────────────────────────────────────────────────────────────

    def _commit(self, course: Course, best: _Candidate) -> str:
        """Bucht den Kandidaten in Schedule, Kurs, Raum und Lehrkraft."""
        teacher = course.teacher
        # Letzte Veranstaltung kürzen statt Reststunden negativ werden zu lassen
        duration = min(self.event_duration, course.remaining_hours)
        placement = Placement(
            course=course.name,
            teacher=teacher.name,
            room=best.room.name,
            day=best.day,
            time_slot=best.time_slot,
            duration=duration,
            course_type=course.course_type,
        )

        self.schedule.add_placement(placement)
        course.schedule_placement(placement)
        best.room.reserve(best.day, best.time_slot)
        teacher.reserve_slot(best.day, best.time_slot)
        teacher.assign_hours(best.day, duration)

        msg = (
            f"Scheduled {course.name} on {best.day} at {best.time_slot} "
            f"in {best.room.name} with {teacher.name}"
        )
        if self.detailed_messages:
            room = best.room
            msg += (
                ".\nBest Candidate Details:\n"
                f"  Date: {best.day}\n"
                f"  Time Slot: {best.time_slot}\n"
                f"  Room: {room.name} (Size: {room.capacity}, "
                f"Resources: {', '.join(room.resources)})\n"
                f"  Teacher: {teacher.name}\n"
                f"  Score: {best.score}"
            )
        logger.info(msg.splitlines()[0])
        return msg

    def _build_result(
        self, courses: list[Course], messages: list[str], period: Optional[str]
    ) -> AllocationResult:
        return AllocationResult(
            placements=list(self.schedule.placements),
            messages=messages,
            unmet_hours={c.name: c.remaining_hours for c in courses if c.remaining_hours > 0},
            days=list(self.schedule.days),
            time_slots=list(self.time_slots),
            period=period,
        )


def allocate(
    courses: list[Course],
    rooms: list[Room],
    config: PlannerConfig,
    period_name: Optional[str] = None,
) -> AllocationResult:
    """Kurzform: Allokator aus Config bauen und einen Lauf ausführen."""
    return GreedyAllocator.from_config(config, period_name).allocate(courses, rooms)
