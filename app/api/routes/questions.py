from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.errors import to_http_exception
from app.api.routes.quiz_models import NextQuestionResponse, QuestionRecord
from app.db.session import get_session_factory
from app.quiz.errors import QuizError
from app.quiz.selection.service import QuestionSelector

router = APIRouter(tags=["questions"])


@router.get("/api/questions/{user_id}/{category_id}", response_model=NextQuestionResponse)
async def next_question(
    user_id: int,
    category_id: int,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> NextQuestionResponse:
    try:
        async with session_factory.begin() as session:
            question = await QuestionSelector.next_question_for_user(
                session,
                user_id=user_id,
                category_id=category_id,
            )
    except QuizError as exc:
        raise to_http_exception(exc) from exc

    if question is None:
        return NextQuestionResponse(question=None, message="No more questions available")
    return NextQuestionResponse(question=QuestionRecord.model_validate(question))
