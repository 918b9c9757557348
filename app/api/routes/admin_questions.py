from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.errors import to_http_exception
from app.api.routes.quiz_models import AdminQuestionRequest, AdminQuestionResponse
from app.db.session import get_session_factory
from app.quiz.authoring import OptionDraft, QuestionDraft, create_question
from app.quiz.errors import QuizError

router = APIRouter(tags=["admin"])


def _draft_from_request(payload: AdminQuestionRequest) -> QuestionDraft:
    return QuestionDraft(
        category_id=payload.category_id,
        question_type_id=payload.question_type_id,
        question_text=payload.question_text,
        explanation=payload.explanation,
        hint_text=payload.hint_text,
        image_url=payload.image_url,
        points=payload.points,
        difficulty_level=payload.difficulty_level,
        options=tuple(
            OptionDraft(
                text=option.text,
                is_correct=option.is_correct,
                icon=option.icon,
                image_url=option.image_url,
            )
            for option in payload.options
        ),
    )


@router.post(
    "/api/admin/questions",
    response_model=AdminQuestionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_admin_question(
    payload: AdminQuestionRequest,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> AdminQuestionResponse:
    try:
        async with session_factory.begin() as session:
            question = await create_question(session, draft=_draft_from_request(payload))
    except QuizError as exc:
        raise to_http_exception(exc) from exc
    return AdminQuestionResponse(message="Question created successfully", question_id=question.id)
