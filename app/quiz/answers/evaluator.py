from __future__ import annotations

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repo.questions_repo import QuestionsRepo
from app.quiz.answers.types import AnswerEvaluation
from app.quiz.errors import AnswerOptionNotFoundError, QuestionNotFoundError

logger = structlog.get_logger(__name__)


class AnswerEvaluator:
    @staticmethod
    async def evaluate(
        session: AsyncSession,
        *,
        question_id: int,
        selected_option_id: int,
    ) -> AnswerEvaluation:
        question = await QuestionsRepo.get_by_id(session, question_id)
        if question is None:
            raise QuestionNotFoundError

        option = await QuestionsRepo.get_option(session, selected_option_id)
        if option is None or option.question_id != question.id:
            raise AnswerOptionNotFoundError

        is_correct = bool(option.is_correct)
        return AnswerEvaluation(
            question_id=question.id,
            category_id=question.category_id,
            question_type_id=question.question_type_id,
            selected_option_id=option.id,
            is_correct=is_correct,
            points_earned=question.points if is_correct else 0,
            explanation=question.explanation,
        )

    @staticmethod
    async def resolve_correct_answer_text(session: AsyncSession, *, question_id: int) -> str:
        """First correct option by position; empty when the question has none."""
        correct_options = await QuestionsRepo.list_correct_options(session, question_id)
        if len(correct_options) != 1:
            logger.warning(
                "quiz_correct_option_anomaly",
                question_id=question_id,
                correct_options=len(correct_options),
            )
        if not correct_options:
            return ""
        return correct_options[0].option_text
