"""Bewertung eines Kandidaten (Kurs, Tag, Slot, Raum, Lehrkraft).

Reine Funktion über dem aktuellen Ledger-Zustand; schreibt nie.
"""

from typing import Optional

from config.schema import AvailabilityGranularity, ScoringWeights
from models.course import Course
from models.room import Room
from models.teacher import Teacher

_DEFAULT_WEIGHTS = ScoringWeights()


def score_candidate(
    course: Course,
    day: str,
    time_slot: str,
    room: Room,
    teacher: Teacher,
    weights: Optional[ScoringWeights] = None,
    granularity: AvailabilityGranularity = AvailabilityGranularity.SLOT,
) -> int:
    """Basiswert minus unabhängig kumulierende Abzüge.

    Kapazität, Ressourcen und Wunschtage fließen nicht ein.
    """
    w = weights or _DEFAULT_WEIGHTS
    score = w.base_score

    if granularity == AvailabilityGranularity.DAY:
        teacher_ok = teacher.is_available(day)
    else:
        teacher_ok = teacher.is_available(day, time_slot)
    if not teacher_ok:
        score -= w.teacher_unavailable_penalty

    if not room.is_available(day, time_slot):
        score -= w.room_unavailable_penalty

    # Streuung: viele Stunden am selben Tag vermeiden
    if teacher.hours_on(day) >= w.dispersion_threshold:
        score -= w.dispersion_penalty

    return score
