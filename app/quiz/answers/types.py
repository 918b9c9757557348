from __future__ import annotations

from dataclasses import dataclass

from app.quiz.performance.types import PerformanceSnapshot
from app.quiz.streak.types import ScoreSnapshot
from app.quiz.types import BadgeView


@dataclass(frozen=True, slots=True)
class AnswerEvaluation:
    question_id: int
    category_id: int
    question_type_id: int
    selected_option_id: int
    is_correct: bool
    points_earned: int
    explanation: str | None


@dataclass(frozen=True, slots=True)
class ProgressSnapshot:
    category_id: int
    questions_answered: int
    correct_answers: int
    points_earned: int
    is_completed: bool


@dataclass(frozen=True, slots=True)
class AppliedResult:
    attempt_id: int
    score: ScoreSnapshot
    progress: ProgressSnapshot
    performance: PerformanceSnapshot


@dataclass(frozen=True, slots=True)
class AnswerSubmissionResult:
    is_correct: bool
    points_earned: int
    explanation: str | None
    correct_answer: str
    new_badges: tuple[BadgeView, ...]
    applied: AppliedResult
