"""Schedule-Aggregat: geordnete Placements + feste Kataloge (Pydantic v2)."""

from pydantic import BaseModel, PrivateAttr

from models.placement import Placement


class Schedule(BaseModel):
    """Append-only Folge aller gebuchten Placements eines Laufs.

    days enthält je nach Tagesquelle Wochentage oder Kalenderdaten.
    """

    time_slots: list[str]
    days: list[str]

    _placements: list[Placement] = PrivateAttr(default_factory=list)

    @property
    def placements(self) -> tuple[Placement, ...]:
        return tuple(self._placements)

    def add_placement(self, placement: Placement) -> None:
        """Hängt ein Placement an. Einziger Schreibzugriff, nur für den Allokator."""
        self._placements.append(placement)

    def __len__(self) -> int:
        return len(self._placements)

    # ─── Abfragen ───

    def get_course_schedule(self, course_name: str) -> list[Placement]:
        return [p for p in self._placements if p.course == course_name]

    def get_teacher_schedule(self, teacher_name: str) -> list[Placement]:
        return [p for p in self._placements if p.teacher == teacher_name]

    def get_room_schedule(self, room_name: str) -> list[Placement]:
        return [p for p in self._placements if p.room == room_name]

    def get_day_schedule(self, day: str) -> list[Placement]:
        """Alle Placements eines Tages in Slot-Reihenfolge."""
        order = {slot: i for i, slot in enumerate(self.time_slots)}
        entries = [p for p in self._placements if p.day == day]
        return sorted(entries, key=lambda p: order.get(p.time_slot, len(order)))
