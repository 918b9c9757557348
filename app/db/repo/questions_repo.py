from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.answer_options import AnswerOption
from app.db.models.question_attempts import QuestionAttempt
from app.db.models.question_types import QuestionType
from app.db.models.questions import Question


class QuestionsRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, question_id: int) -> Question | None:
        return await session.get(Question, question_id)

    @staticmethod
    async def get_with_type_name(
        session: AsyncSession,
        question_id: int,
    ) -> tuple[Question, str] | None:
        stmt = (
            select(Question, QuestionType.type_name)
            .join(QuestionType, QuestionType.id == Question.question_type_id)
            .where(Question.id == question_id)
        )
        result = await session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        return row[0], str(row[1])

    @staticmethod
    async def list_unattempted_ids(
        session: AsyncSession,
        *,
        user_id: int,
        category_id: int,
        question_type_ids: Sequence[int] | None = None,
    ) -> list[int]:
        attempted = select(QuestionAttempt.question_id).where(QuestionAttempt.user_id == user_id)
        stmt = select(Question.id).where(
            Question.category_id == category_id,
            Question.is_active.is_(True),
            Question.id.not_in(attempted),
        )
        if question_type_ids is not None:
            if not question_type_ids:
                return []
            stmt = stmt.where(Question.question_type_id.in_(tuple(question_type_ids)))
        result = await session.execute(stmt.order_by(Question.id.asc()))
        return [int(question_id) for question_id in result.scalars().all()]

    @staticmethod
    async def list_unattempted_type_ids(
        session: AsyncSession,
        *,
        user_id: int,
        category_id: int,
    ) -> set[int]:
        attempted = select(QuestionAttempt.question_id).where(QuestionAttempt.user_id == user_id)
        stmt = (
            select(Question.question_type_id)
            .where(
                Question.category_id == category_id,
                Question.is_active.is_(True),
                Question.id.not_in(attempted),
            )
            .distinct()
        )
        result = await session.execute(stmt)
        return {int(type_id) for type_id in result.scalars().all()}

    @staticmethod
    async def list_options(session: AsyncSession, question_id: int) -> list[AnswerOption]:
        stmt = (
            select(AnswerOption)
            .where(AnswerOption.question_id == question_id)
            .order_by(AnswerOption.order_position.asc(), AnswerOption.id.asc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def get_option(session: AsyncSession, option_id: int) -> AnswerOption | None:
        return await session.get(AnswerOption, option_id)

    @staticmethod
    async def list_correct_options(session: AsyncSession, question_id: int) -> list[AnswerOption]:
        stmt = (
            select(AnswerOption)
            .where(AnswerOption.question_id == question_id, AnswerOption.is_correct.is_(True))
            .order_by(AnswerOption.order_position.asc(), AnswerOption.id.asc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def find_in_category_by_text(
        session: AsyncSession,
        *,
        category_id: int,
        question_text: str,
    ) -> Question | None:
        stmt = select(Question).where(
            Question.category_id == category_id,
            Question.question_text == question_text,
        )
        result = await session.execute(stmt.limit(1))
        return result.scalar_one_or_none()

    @staticmethod
    async def create(session: AsyncSession, *, question: Question) -> Question:
        session.add(question)
        await session.flush()
        return question

    @staticmethod
    async def add_options(session: AsyncSession, *, options: Sequence[AnswerOption]) -> None:
        session.add_all(list(options))
        await session.flush()
