from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ScoreSnapshot:
    total_points: int
    current_streak: int
    best_streak: int
