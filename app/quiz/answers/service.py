from __future__ import annotations

from datetime import datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.quiz.answers.evaluator import AnswerEvaluator
from app.quiz.answers.progress import ProgressService
from app.quiz.answers.types import AnswerSubmissionResult
from app.quiz.badges.service import BadgeService
from app.quiz.errors import QuizValidationError

logger = structlog.get_logger(__name__)


async def submit_answer(
    session: AsyncSession,
    *,
    user_id: int,
    question_id: int,
    selected_option_id: int,
    time_taken: int,
    hint_used: bool,
    now_utc: datetime,
) -> AnswerSubmissionResult:
    if time_taken < 0:
        raise QuizValidationError("timeTaken must not be negative")

    evaluation = await AnswerEvaluator.evaluate(
        session,
        question_id=question_id,
        selected_option_id=selected_option_id,
    )
    applied = await ProgressService.apply_result(
        session,
        user_id=user_id,
        evaluation=evaluation,
        time_taken=time_taken,
        hint_used=hint_used,
        now_utc=now_utc,
    )
    new_badges = await BadgeService.award_eligible_badges(session, user_id=user_id, now_utc=now_utc)
    correct_answer = await AnswerEvaluator.resolve_correct_answer_text(
        session,
        question_id=evaluation.question_id,
    )

    logger.info(
        "quiz_answer_submitted",
        user_id=user_id,
        question_id=evaluation.question_id,
        category_id=evaluation.category_id,
        is_correct=evaluation.is_correct,
        points_earned=evaluation.points_earned,
        current_streak=applied.score.current_streak,
        category_completed=applied.progress.is_completed,
        new_badges=len(new_badges),
    )
    return AnswerSubmissionResult(
        is_correct=evaluation.is_correct,
        points_earned=evaluation.points_earned,
        explanation=evaluation.explanation,
        correct_answer=correct_answer,
        new_badges=tuple(new_badges),
        applied=applied,
    )
