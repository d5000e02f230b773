"""Datenmodell für eine Lehrkraft inkl. Belegungs-Ledger (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, Field, PrivateAttr, field_validator


class Teacher(BaseModel):
    """Repräsentiert eine Lehrkraft.

    Das Ledger (reservierte Slots, Stunden pro Tag) ist privat und wird nur
    über is_available / reserve_slot / assign_hours angesprochen.
    """

    name: str                                        # "Dr. Johnson"
    preferred_days: list[str] = []                   # nur informativ
    max_hours_per_week: int = Field(ge=0)

    _reserved: dict[str, set[str]] = PrivateAttr(default_factory=dict)
    _daily_load: dict[str, int] = PrivateAttr(default_factory=dict)
    _assigned_hours: int = PrivateAttr(default=0)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name der Lehrkraft darf nicht leer sein.")
        return v

    # ─── Abfragen ───

    def is_available(self, day: str, slot: Optional[str] = None) -> bool:
        """False wenn (day, slot) bereits reserviert ist oder die Tageslast
        das Limit erreicht hat.

        ACHTUNG: max_hours_per_week wird gegen die Stunden des *Tages*
        verglichen, nicht gegen die Wochensumme. Ohne slot wird nur die
        Tageslast geprüft.
        """
        if slot is not None and self.is_reserved(day, slot):
            return False
        return self.hours_on(day) < self.max_hours_per_week

    def is_reserved(self, day: str, slot: str) -> bool:
        return slot in self._reserved.get(day, ())

    def hours_on(self, day: str) -> int:
        """Bereits zugewiesene Stunden an einem Tag."""
        return self._daily_load.get(day, 0)

    @property
    def assigned_hours(self) -> int:
        return self._assigned_hours

    @property
    def reserved_slots(self) -> list[tuple[str, str]]:
        """Kopie aller reservierten (Tag, Slot)-Paare."""
        return [(day, slot) for day, slots in self._reserved.items() for slot in sorted(slots)]

    # ─── Buchungen (nur durch den Allokator) ───

    def reserve_slot(self, day: str, slot: str) -> None:
        self._reserved.setdefault(day, set()).add(slot)

    def assign_hours(self, day: str, hours: int) -> None:
        self._daily_load[day] = self._daily_load.get(day, 0) + hours
        self._assigned_hours += hours

    def fresh_copy(self) -> "Teacher":
        """Neue Instanz mit leerem Ledger."""
        return Teacher.model_validate(self.model_dump())
