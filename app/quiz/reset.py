from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.question_attempts import QuestionAttempt
from app.db.repo.categories_repo import CategoriesRepo
from app.db.repo.progress_repo import ProgressRepo
from app.db.repo.question_attempts_repo import QuestionAttemptsRepo
from app.db.repo.users_repo import UsersRepo
from app.quiz.errors import CategoryNotFoundError, UserNotFoundError
from app.quiz.performance.service import PerformanceService
from app.quiz.types import ResetProgressResult

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class _RemovedTypeTotals:
    attempts: int = 0
    correct: int = 0
    time_taken_total: int = 0


def _totals_by_type(attempts: list[QuestionAttempt]) -> dict[int, _RemovedTypeTotals]:
    totals: dict[int, _RemovedTypeTotals] = defaultdict(_RemovedTypeTotals)
    for attempt in attempts:
        bucket = totals[attempt.question_type_id]
        bucket.attempts += 1
        bucket.correct += 1 if attempt.is_correct else 0
        bucket.time_taken_total += attempt.time_taken or 0
    return dict(totals)


async def reset_category_progress(
    session: AsyncSession,
    *,
    user_id: int,
    category_id: int,
    now_utc: datetime,
) -> ResetProgressResult:
    """Forgets one category for one user. Streaks and earned badges are kept."""
    user = await UsersRepo.get_by_id_for_update(session, user_id)
    if user is None:
        raise UserNotFoundError
    if await CategoriesRepo.get_by_id(session, category_id) is None:
        raise CategoryNotFoundError

    attempts = await QuestionAttemptsRepo.list_for_user_in_category(
        session,
        user_id=user_id,
        category_id=category_id,
    )
    for question_type_id, removed in sorted(_totals_by_type(attempts).items()):
        await PerformanceService.remove_attempts(
            session,
            user_id=user_id,
            question_type_id=question_type_id,
            attempts=removed.attempts,
            correct=removed.correct,
            time_taken_total=removed.time_taken_total,
            now_utc=now_utc,
        )

    removed_count = await QuestionAttemptsRepo.delete_by_ids(
        session,
        [attempt.id for attempt in attempts],
    )
    await ProgressRepo.delete(session, user_id=user_id, category_id=category_id)

    user.total_points = await ProgressRepo.sum_points_for_user(session, user_id=user_id)
    await session.flush()

    logger.info(
        "quiz_progress_reset",
        user_id=user_id,
        category_id=category_id,
        attempts_removed=removed_count,
        total_points=user.total_points,
    )
    return ResetProgressResult(
        user_id=user_id,
        category_id=category_id,
        attempts_removed=removed_count,
        total_points=user.total_points,
    )
