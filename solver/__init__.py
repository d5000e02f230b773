"""Solver-Modul (Greedy-Allokation ohne Backtracking)."""

from .allocator import GreedyAllocator, AllocationResult, allocate
from .day_source import DaySource, FixedDays, PeriodDays, InvalidPeriodError, expand_period
from .scoring import score_candidate

__all__ = [
    "GreedyAllocator",
    "AllocationResult",
    "allocate",
    "DaySource",
    "FixedDays",
    "PeriodDays",
    "InvalidPeriodError",
    "expand_period",
    "score_candidate",
]
