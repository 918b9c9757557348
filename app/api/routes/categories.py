from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.errors import to_http_exception
from app.api.routes.quiz_models import CategoriesResponse, CategoryProgressRecord
from app.db.session import get_session_factory
from app.quiz.dashboard import list_categories_with_progress
from app.quiz.errors import QuizError
from app.quiz.users import get_user

router = APIRouter(tags=["categories"])


@router.get("/api/categories/{user_id}", response_model=CategoriesResponse)
async def list_categories(
    user_id: int,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> CategoriesResponse:
    try:
        async with session_factory.begin() as session:
            await get_user(session, user_id=user_id)
            categories = await list_categories_with_progress(session, user_id=user_id)
    except QuizError as exc:
        raise to_http_exception(exc) from exc
    return CategoriesResponse(
        categories=[CategoryProgressRecord.model_validate(category) for category in categories],
    )
