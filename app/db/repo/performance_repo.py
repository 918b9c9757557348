from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.question_types import QuestionType
from app.db.models.user_question_type_performance import UserQuestionTypePerformance


class PerformanceRepo:
    @staticmethod
    async def list_type_stats(
        session: AsyncSession,
        *,
        user_id: int,
    ) -> list[tuple[int, str, str, float, int]]:
        """Every question type with the user's success rate and attempt count (0 when untried)."""
        stmt = (
            select(
                QuestionType.id,
                QuestionType.type_name,
                QuestionType.difficulty_level,
                func.coalesce(UserQuestionTypePerformance.success_rate, 0.0),
                func.coalesce(UserQuestionTypePerformance.total_attempts, 0),
            )
            .outerjoin(
                UserQuestionTypePerformance,
                (UserQuestionTypePerformance.question_type_id == QuestionType.id)
                & (UserQuestionTypePerformance.user_id == user_id),
            )
            .order_by(QuestionType.id.asc())
        )
        result = await session.execute(stmt)
        return [
            (int(type_id), str(type_name), str(difficulty), float(rate), int(attempts))
            for type_id, type_name, difficulty, rate, attempts in result.all()
        ]

    @staticmethod
    async def get_for_update(
        session: AsyncSession,
        *,
        user_id: int,
        question_type_id: int,
    ) -> UserQuestionTypePerformance | None:
        stmt = (
            select(UserQuestionTypePerformance)
            .where(
                UserQuestionTypePerformance.user_id == user_id,
                UserQuestionTypePerformance.question_type_id == question_type_id,
            )
            .with_for_update()
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(
        session: AsyncSession,
        *,
        user_id: int,
        question_type_id: int,
        total_attempts: int,
        correct_attempts: int,
        success_rate: float,
        avg_time_taken: float,
        now_utc: datetime,
    ) -> UserQuestionTypePerformance:
        row = UserQuestionTypePerformance(
            user_id=user_id,
            question_type_id=question_type_id,
            total_attempts=total_attempts,
            correct_attempts=correct_attempts,
            success_rate=success_rate,
            avg_time_taken=avg_time_taken,
            last_attempted=now_utc,
            updated_at=now_utc,
        )
        session.add(row)
        await session.flush()
        return row

    @staticmethod
    async def list_for_user(session: AsyncSession, *, user_id: int) -> list[UserQuestionTypePerformance]:
        stmt = (
            select(UserQuestionTypePerformance)
            .where(UserQuestionTypePerformance.user_id == user_id)
            .order_by(UserQuestionTypePerformance.question_type_id.asc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def delete_for_user(session: AsyncSession, *, user_id: int) -> int:
        stmt = delete(UserQuestionTypePerformance).where(UserQuestionTypePerformance.user_id == user_id)
        result = await session.execute(stmt.execution_options(synchronize_session=False))
        return result.rowcount or 0
