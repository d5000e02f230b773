"""Eine fest gebuchte Veranstaltung (Pydantic v2, unveränderlich)."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Placement(BaseModel):
    """Kurs + Lehrkraft + Raum an (Tag, Slot). Wird nur beim Commit erzeugt."""

    model_config = ConfigDict(frozen=True)

    course: str
    teacher: str
    room: str
    day: str            # Wochentag oder Datum "YYYY-MM-DD"
    time_slot: str      # "9:00-10:20"
    duration: int = Field(2, ge=1)
    course_type: Optional[str] = None

    def describe(self) -> str:
        """Einzeiler für Konsole und Protokoll."""
        return f"{self.day} {self.time_slot}: {self.course} in {self.room} by {self.teacher}"
