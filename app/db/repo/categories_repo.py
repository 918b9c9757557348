from __future__ import annotations

from sqlalchemy import false, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.categories import Category
from app.db.models.questions import Question
from app.db.models.user_progress import UserProgress


class CategoriesRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, category_id: int) -> Category | None:
        return await session.get(Category, category_id, populate_existing=True)

    @staticmethod
    async def list_all(session: AsyncSession) -> list[Category]:
        result = await session.execute(select(Category).order_by(Category.id.asc()))
        return list(result.scalars().all())

    @staticmethod
    async def list_with_progress(
        session: AsyncSession,
        *,
        user_id: int,
    ) -> list[tuple[Category, int, int, int, bool]]:
        stmt = (
            select(
                Category,
                func.coalesce(UserProgress.questions_answered, 0),
                func.coalesce(UserProgress.correct_answers, 0),
                func.coalesce(UserProgress.points_earned, 0),
                func.coalesce(UserProgress.is_completed, false()),
            )
            .outerjoin(
                UserProgress,
                (UserProgress.category_id == Category.id) & (UserProgress.user_id == user_id),
            )
            .order_by(Category.id.asc())
        )
        result = await session.execute(stmt)
        return [
            (category, int(answered), int(correct), int(points), bool(completed))
            for category, answered, correct, points, completed in result.all()
        ]

    @staticmethod
    async def recount_total_questions(session: AsyncSession, *, category_id: int | None = None) -> int:
        active_count = (
            select(func.count(Question.id))
            .where(Question.category_id == Category.id, Question.is_active.is_(True))
            .correlate(Category)
            .scalar_subquery()
        )
        stmt = update(Category).values(total_questions=active_count)
        if category_id is not None:
            stmt = stmt.where(Category.id == category_id)
        result = await session.execute(stmt.execution_options(synchronize_session=False))
        return result.rowcount or 0
