from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BadgeRequirementType(str, Enum):
    POINTS = "points"
    STREAK = "streak"
    QUESTIONS_ANSWERED = "questions_answered"
    CATEGORY_COMPLETE = "category_complete"


@dataclass(frozen=True, slots=True)
class BadgeProgressState:
    total_points: int
    current_streak: int
    questions_answered: int
    completed_category_ids: frozenset[int]
