"""Datenmodell für einen Raum inkl. Belegungs-Ledger (Pydantic v2)."""

from pydantic import BaseModel, Field, PrivateAttr


class Room(BaseModel):
    """Repräsentiert einen Hörsaal / Seminarraum."""

    name: str                            # "A101"
    capacity: int = Field(ge=0)          # Sitzplätze (nur informativ)
    resources: list[str] = []            # "computers", "projector", ...

    _reserved: dict[str, set[str]] = PrivateAttr(default_factory=dict)

    def is_available(self, day: str, slot: str) -> bool:
        return slot not in self._reserved.get(day, ())

    def reserve(self, day: str, slot: str) -> None:
        self._reserved.setdefault(day, set()).add(slot)

    @property
    def reserved_count(self) -> int:
        return sum(len(s) for s in self._reserved.values())

    def fresh_copy(self) -> "Room":
        """Neue Instanz mit leerem Ledger."""
        return Room.model_validate(self.model_dump())
