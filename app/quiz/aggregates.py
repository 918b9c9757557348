"""Recomputation of the cached per-user aggregates from the attempt log.

``user_progress`` and ``user_question_type_performance`` are maintained
incrementally on every answer. Both must always equal what this module derives
from ``question_attempts``, which makes it usable as a repair tool and as a
cross-check in tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repo.categories_repo import CategoriesRepo
from app.db.repo.performance_repo import PerformanceRepo
from app.db.repo.progress_repo import ProgressRepo
from app.db.repo.question_attempts_repo import QuestionAttemptsRepo
from app.db.repo.users_repo import UsersRepo
from app.quiz.answers.types import ProgressSnapshot
from app.quiz.errors import UserNotFoundError
from app.quiz.performance.rules import success_rate
from app.quiz.performance.types import PerformanceSnapshot
from app.quiz.streak.rules import is_completed

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class _ProgressTotals:
    answered: int = 0
    correct: int = 0
    points: int = 0


@dataclass(slots=True)
class _TypeTotals:
    attempts: int = 0
    correct: int = 0
    time_taken_total: int = 0


@dataclass(frozen=True, slots=True)
class UserAggregates:
    progress: dict[int, ProgressSnapshot] = field(default_factory=dict)
    performance: dict[int, PerformanceSnapshot] = field(default_factory=dict)


async def compute_user_aggregates(session: AsyncSession, *, user_id: int) -> UserAggregates:
    rows = await QuestionAttemptsRepo.list_with_question_for_user(session, user_id=user_id)
    totals_by_category = {
        category.id: category.total_questions for category in await CategoriesRepo.list_all(session)
    }

    progress: dict[int, _ProgressTotals] = {}
    performance: dict[int, _TypeTotals] = {}
    for attempt, category_id, points in rows:
        category_totals = progress.setdefault(category_id, _ProgressTotals())
        category_totals.answered += 1
        if attempt.is_correct:
            category_totals.correct += 1
            category_totals.points += points

        type_totals = performance.setdefault(attempt.question_type_id, _TypeTotals())
        type_totals.attempts += 1
        type_totals.correct += 1 if attempt.is_correct else 0
        type_totals.time_taken_total += attempt.time_taken or 0

    return UserAggregates(
        progress={
            category_id: ProgressSnapshot(
                category_id=category_id,
                questions_answered=totals.answered,
                correct_answers=totals.correct,
                points_earned=totals.points,
                is_completed=is_completed(
                    questions_answered=totals.answered,
                    total_questions=totals_by_category.get(category_id, 0),
                    already_completed=False,
                ),
            )
            for category_id, totals in progress.items()
        },
        performance={
            type_id: PerformanceSnapshot(
                total_attempts=totals.attempts,
                correct_attempts=totals.correct,
                success_rate=success_rate(
                    correct_attempts=totals.correct,
                    total_attempts=totals.attempts,
                ),
                avg_time_taken=totals.time_taken_total / totals.attempts,
            )
            for type_id, totals in performance.items()
        },
    )


async def rebuild_user_aggregates(
    session: AsyncSession,
    *,
    user_id: int,
    now_utc: datetime,
) -> UserAggregates:
    """Replaces the user's cached aggregate rows with values derived from the log.

    The user's total points become the sum over the rebuilt progress rows;
    streaks are not derivable from the log and stay as they are.
    """
    user = await UsersRepo.get_by_id_for_update(session, user_id)
    if user is None:
        raise UserNotFoundError

    aggregates = await compute_user_aggregates(session, user_id=user_id)
    await ProgressRepo.delete(session, user_id=user_id)
    await PerformanceRepo.delete_for_user(session, user_id=user_id)

    for snapshot in aggregates.progress.values():
        await ProgressRepo.create(
            session,
            user_id=user_id,
            category_id=snapshot.category_id,
            questions_answered=snapshot.questions_answered,
            correct_answers=snapshot.correct_answers,
            points_earned=snapshot.points_earned,
            is_completed=snapshot.is_completed,
            last_question_id=None,
            now_utc=now_utc,
        )
    for question_type_id, snapshot in aggregates.performance.items():
        await PerformanceRepo.create(
            session,
            user_id=user_id,
            question_type_id=question_type_id,
            total_attempts=snapshot.total_attempts,
            correct_attempts=snapshot.correct_attempts,
            success_rate=snapshot.success_rate,
            avg_time_taken=snapshot.avg_time_taken,
            now_utc=now_utc,
        )

    user.total_points = sum(snapshot.points_earned for snapshot in aggregates.progress.values())
    await session.flush()
    logger.info(
        "quiz_aggregates_rebuilt",
        user_id=user_id,
        categories=len(aggregates.progress),
        question_types=len(aggregates.performance),
    )
    return aggregates
