from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.errors import to_http_exception
from app.api.routes.quiz_models import BadgeRecord, SubmitAnswerRequest, SubmitAnswerResponse
from app.db.session import get_session_factory
from app.quiz.answers.service import submit_answer
from app.quiz.errors import QuizError

router = APIRouter(tags=["answers"])


@router.post("/api/answers", response_model=SubmitAnswerResponse)
async def post_answer(
    payload: SubmitAnswerRequest,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> SubmitAnswerResponse:
    structlog.contextvars.bind_contextvars(user_id=payload.user_id, question_id=payload.question_id)
    try:
        async with session_factory.begin() as session:
            result = await submit_answer(
                session,
                user_id=payload.user_id,
                question_id=payload.question_id,
                selected_option_id=payload.selected_answer_id,
                time_taken=payload.time_taken,
                hint_used=payload.hint_used,
                now_utc=datetime.now(timezone.utc),
            )
    except QuizError as exc:
        raise to_http_exception(exc) from exc

    return SubmitAnswerResponse(
        is_correct=result.is_correct,
        points_earned=result.points_earned,
        explanation=result.explanation,
        correct_answer=result.correct_answer,
        new_badges=[BadgeRecord.model_validate(badge) for badge in result.new_badges],
    )
