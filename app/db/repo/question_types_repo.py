from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.question_types import QuestionType


class QuestionTypesRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, question_type_id: int) -> QuestionType | None:
        return await session.get(QuestionType, question_type_id)

    @staticmethod
    async def list_all(session: AsyncSession) -> list[QuestionType]:
        result = await session.execute(select(QuestionType).order_by(QuestionType.id.asc()))
        return list(result.scalars().all())

    @staticmethod
    async def list_ids_by_difficulty_and_names(
        session: AsyncSession,
        *,
        difficulty_level: str,
        type_names: Sequence[str],
    ) -> list[int]:
        if not type_names:
            return []
        stmt = (
            select(QuestionType.id)
            .where(
                QuestionType.difficulty_level == difficulty_level,
                QuestionType.type_name.in_(tuple(type_names)),
            )
            .order_by(QuestionType.id.asc())
        )
        result = await session.execute(stmt)
        return [int(type_id) for type_id in result.scalars().all()]
