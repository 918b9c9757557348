from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class OptionView:
    id: int
    option_text: str
    icon: str | None
    image_url: str | None
    order_position: int


@dataclass(frozen=True, slots=True)
class QuestionView:
    id: int
    category_id: int
    question_type_id: int
    type_name: str
    question_text: str
    image_url: str | None
    difficulty_level: str
    points: int
    hint_text: str | None
    options: tuple[OptionView, ...]


@dataclass(frozen=True, slots=True)
class BadgeView:
    id: int
    name: str
    description: str | None
    icon: str | None
    category_id: int | None
    requirement_type: str
    requirement_value: int
    earned_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class UserView:
    id: int
    name: str
    total_points: int
    current_streak: int
    best_streak: int
    created_at: datetime | None
    last_active: datetime | None


@dataclass(frozen=True, slots=True)
class CategoryProgressView:
    id: int
    name: str
    icon: str
    description: str | None
    total_questions: int
    questions_answered: int
    correct_answers: int
    points_earned: int
    is_completed: bool


@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
    name: str
    total_points: int
    best_streak: int
    badge_count: int


@dataclass(frozen=True, slots=True)
class ProgressDashboard:
    user: UserView
    category_progress: tuple[CategoryProgressView, ...]
    earned_badges: tuple[BadgeView, ...]
    all_badges: tuple[BadgeView, ...]


@dataclass(frozen=True, slots=True)
class EnsureUserResult:
    user: UserView
    created: bool


@dataclass(frozen=True, slots=True)
class ResetProgressResult:
    user_id: int
    category_id: int
    attempts_removed: int
    total_points: int
