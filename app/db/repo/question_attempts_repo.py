from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.question_attempts import QuestionAttempt
from app.db.models.questions import Question


class QuestionAttemptsRepo:
    @staticmethod
    async def create(session: AsyncSession, *, attempt: QuestionAttempt) -> QuestionAttempt:
        session.add(attempt)
        await session.flush()
        return attempt

    @staticmethod
    async def count_for_user(session: AsyncSession, *, user_id: int) -> int:
        stmt = select(func.count(QuestionAttempt.id)).where(QuestionAttempt.user_id == user_id)
        result = await session.execute(stmt)
        return int(result.scalar_one() or 0)

    @staticmethod
    async def list_for_user_in_category(
        session: AsyncSession,
        *,
        user_id: int,
        category_id: int,
    ) -> list[QuestionAttempt]:
        stmt = (
            select(QuestionAttempt)
            .join(Question, Question.id == QuestionAttempt.question_id)
            .where(QuestionAttempt.user_id == user_id, Question.category_id == category_id)
            .order_by(QuestionAttempt.id.asc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def list_with_question_for_user(
        session: AsyncSession,
        *,
        user_id: int,
    ) -> list[tuple[QuestionAttempt, int, int]]:
        """Attempts joined with their question's category and point value, oldest first."""
        stmt = (
            select(QuestionAttempt, Question.category_id, Question.points)
            .join(Question, Question.id == QuestionAttempt.question_id)
            .where(QuestionAttempt.user_id == user_id)
            .order_by(QuestionAttempt.id.asc())
        )
        result = await session.execute(stmt)
        return [(attempt, int(category_id), int(points)) for attempt, category_id, points in result.all()]

    @staticmethod
    async def delete_by_ids(session: AsyncSession, attempt_ids: Sequence[int]) -> int:
        ids = tuple(int(attempt_id) for attempt_id in attempt_ids)
        if not ids:
            return 0
        stmt = delete(QuestionAttempt).where(QuestionAttempt.id.in_(ids))
        result = await session.execute(stmt.execution_options(synchronize_session=False))
        return result.rowcount or 0
