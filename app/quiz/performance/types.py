from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TypeStat:
    question_type_id: int
    type_name: str
    difficulty_level: str
    success_rate: float
    total_attempts: int


@dataclass(frozen=True, slots=True)
class PerformanceSnapshot:
    total_attempts: int
    correct_attempts: int
    success_rate: float
    avg_time_taken: float


EMPTY_PERFORMANCE = PerformanceSnapshot(
    total_attempts=0,
    correct_attempts=0,
    success_rate=0.0,
    avg_time_taken=0.0,
)
