from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class DayMode(str, Enum):
    FIXED = "fixed"
    PERIOD = "period"


class AvailabilityGranularity(str, Enum):
    """Wie der Bewerter die Lehrer-Verfügbarkeit prüft."""
    SLOT = "slot"   # (Tag, Slot)-genau
    DAY = "day"     # nur Tageslast, Slot wird ignoriert


# ─── ZEITRASTER ───

class TimeGridConfig(BaseModel):
    """Feste Kataloge: Zeitslots pro Tag und erlaubte Wochentage.

    Die Reihenfolge beider Listen bestimmt die Suchreihenfolge des
    Allokators und damit den Tie-Break.
    """
    # Bezeichnungen der Zeitslots in Tagesreihenfolge
    time_slots: list[str] = Field(
        description="Zeitslots pro Tag (geordnet)")
    # Erlaubte Tage im Modus 'fixed'
    day_names: list[str] = Field(
        default=["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"],
        description="Erlaubte Tage (geordnet)")

    @model_validator(mode='after')
    def validate_unique_labels(self):
        if len(set(self.time_slots)) != len(self.time_slots):
            raise ValueError("Zeitslot-Bezeichnungen müssen eindeutig sein")
        if len(set(self.day_names)) != len(self.day_names):
            raise ValueError("Tagesnamen müssen eindeutig sein")
        return self


# ─── PLANUNGSZEITRÄUME ───

class PeriodDefinition(BaseModel):
    """Ein Kalenderzeitraum (inklusive beider Grenzen).

    Fehlende Grenzen sind erlaubt und werden erst beim Lauf als
    ungültiger Zeitraum gemeldet.
    """
    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None


# ─── ALLOKATOR ───

class ScoringWeights(BaseModel):
    """Bewertungsformel für Kandidaten. Defaults = Originalformel."""
    # Startwert jeder Bewertung
    base_score: int = Field(100,
        description="Basiswert")
    # Abzug wenn die Lehrkraft nicht verfügbar ist
    teacher_unavailable_penalty: int = Field(30, ge=0,
        description="Abzug: Lehrkraft nicht verfügbar")
    # Abzug wenn der Raum belegt ist
    room_unavailable_penalty: int = Field(50, ge=0,
        description="Abzug: Raum belegt")
    # Abzug für hohe Tageslast (Streuung über die Woche)
    dispersion_penalty: int = Field(20, ge=0,
        description="Abzug: hohe Tageslast der Lehrkraft")
    # Ab dieser Tageslast (Stunden) greift der Streuungs-Abzug
    dispersion_threshold: int = Field(4, ge=0,
        description="Tageslast-Schwelle für den Streuungs-Abzug")


class AllocatorConfig(BaseModel):
    """Konfiguration des Greedy-Allokators."""
    # Dauer einer Veranstaltung in Stunden
    event_duration: int = Field(2, ge=1,
        description="Dauer einer Veranstaltung (Stunden)")
    # Tagesquelle: feste Tagesliste oder Kalenderzeitraum
    day_mode: DayMode = Field(DayMode.FIXED,
        description="Tagesquelle: fixed oder period")
    # Aktiver Zeitraum im Modus 'period'
    active_period: Optional[str] = Field("Lecture",
        description="Name des aktiven Zeitraums")
    # Granularität der Lehrer-Prüfung im Bewerter
    granularity: AvailabilityGranularity = Field(AvailabilityGranularity.SLOT,
        description="Lehrer-Prüfung im Bewerter: slot oder day")
    # Belegte Räume nur per Abzug bestrafen statt verwerfen (Altverhalten)
    allow_room_overlap: bool = Field(False,
        description="Belegte Räume zulassen (nur Abzug)")
    # Meldung pro verworfenem Kandidaten
    report_discarded: bool = Field(False,
        description="Verworfene Kandidaten melden")
    # Ausführliche Kandidatendetails in Erfolgsmeldungen
    detailed_messages: bool = Field(False,
        description="Raumdetails in Erfolgsmeldungen")
    weights: ScoringWeights = Field(default_factory=ScoringWeights)


# ─── AUSGABE ───

class OutputConfig(BaseModel):
    """Ausgabeverzeichnisse."""
    # Verzeichnis für Protokolldateien
    log_dir: str = Field("output/logs",
        description="Verzeichnis für Protokolldateien")
    # Verzeichnis für Excel/PDF/JSON
    export_dir: str = Field("output",
        description="Verzeichnis für Exporte")


# ─── GESAMT-CONFIG ───

class PlannerConfig(BaseModel):
    """Gesamtkonfiguration der Einsatzplanung."""
    # Name der Einrichtung (Kopfzeilen der Exporte)
    institution_name: str = Field("Muster-Hochschule",
        description="Name der Einrichtung")
    time_grid: TimeGridConfig
    # Benannte Planungszeiträume
    periods: dict[str, PeriodDefinition] = Field(default_factory=dict)
    allocator: AllocatorConfig = Field(default_factory=AllocatorConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("periods")
    @classmethod
    def _period_names_not_blank(cls, v: dict[str, PeriodDefinition]):
        for name in v:
            if not name.strip():
                raise ValueError("Zeitraum-Namen dürfen nicht leer sein")
        return v

    def get_period(self, name: Optional[str] = None) -> Optional[PeriodDefinition]:
        """Gibt den benannten (oder aktiven) Zeitraum zurück, sonst None."""
        key = name if name is not None else self.allocator.active_period
        if key is None:
            return None
        return self.periods.get(key)
