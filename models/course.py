"""Datenmodell für eine Lehrveranstaltung mit Stundenbedarf (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, Field, PrivateAttr

from models.placement import Placement
from models.teacher import Teacher


class Course(BaseModel):
    """Eine Lehrveranstaltung, fest an genau eine Lehrkraft gebunden.

    remaining_hours = total_hours - Summe der Dauern aller Placements.
    """

    name: str
    total_hours: int = Field(gt=0)
    teacher: Teacher
    course_type: Optional[str] = None   # "Lecture", "Seminary"

    _placements: list[Placement] = PrivateAttr(default_factory=list)
    _remaining_hours: int = PrivateAttr(default=0)

    def model_post_init(self, __context) -> None:
        self._remaining_hours = self.total_hours

    @property
    def remaining_hours(self) -> int:
        return self._remaining_hours

    @property
    def scheduled_hours(self) -> int:
        return self.total_hours - self._remaining_hours

    @property
    def is_complete(self) -> bool:
        return self._remaining_hours <= 0

    @property
    def placements(self) -> tuple[Placement, ...]:
        return tuple(self._placements)

    def schedule_placement(self, placement: Placement) -> None:
        """Verbucht ein Placement. Nur durch den Allokator aufzurufen."""
        if placement.duration > self._remaining_hours:
            raise ValueError(
                f"Placement ({placement.duration}h) übersteigt Restbedarf "
                f"von {self.name} ({self._remaining_hours}h)"
            )
        self._placements.append(placement)
        self._remaining_hours -= placement.duration
