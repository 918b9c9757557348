from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.user_progress import UserProgress


class ProgressRepo:
    @staticmethod
    async def get(session: AsyncSession, *, user_id: int, category_id: int) -> UserProgress | None:
        stmt = select(UserProgress).where(
            UserProgress.user_id == user_id,
            UserProgress.category_id == category_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_for_update(
        session: AsyncSession,
        *,
        user_id: int,
        category_id: int,
    ) -> UserProgress | None:
        stmt = (
            select(UserProgress)
            .where(UserProgress.user_id == user_id, UserProgress.category_id == category_id)
            .with_for_update()
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(
        session: AsyncSession,
        *,
        user_id: int,
        category_id: int,
        questions_answered: int,
        correct_answers: int,
        points_earned: int,
        is_completed: bool,
        last_question_id: int | None,
        now_utc: datetime,
    ) -> UserProgress:
        progress = UserProgress(
            user_id=user_id,
            category_id=category_id,
            questions_answered=questions_answered,
            correct_answers=correct_answers,
            points_earned=points_earned,
            is_completed=is_completed,
            last_question_id=last_question_id,
            created_at=now_utc,
            updated_at=now_utc,
        )
        session.add(progress)
        await session.flush()
        return progress

    @staticmethod
    async def list_for_user(session: AsyncSession, *, user_id: int) -> list[UserProgress]:
        stmt = (
            select(UserProgress)
            .where(UserProgress.user_id == user_id)
            .order_by(UserProgress.category_id.asc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def sum_points_for_user(session: AsyncSession, *, user_id: int) -> int:
        stmt = select(func.coalesce(func.sum(UserProgress.points_earned), 0)).where(
            UserProgress.user_id == user_id
        )
        result = await session.execute(stmt)
        return int(result.scalar_one() or 0)

    @staticmethod
    async def delete(session: AsyncSession, *, user_id: int, category_id: int | None = None) -> int:
        stmt = delete(UserProgress).where(UserProgress.user_id == user_id)
        if category_id is not None:
            stmt = stmt.where(UserProgress.category_id == category_id)
        result = await session.execute(stmt.execution_options(synchronize_session=False))
        return result.rowcount or 0
