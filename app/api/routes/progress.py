from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.errors import to_http_exception
from app.api.routes.quiz_models import (
    BadgeRecord,
    CategoryProgressRecord,
    ProgressResponse,
    ResetProgressRequest,
    ResetProgressResponse,
    UserRecord,
)
from app.db.session import get_session_factory
from app.quiz.dashboard import get_progress_dashboard
from app.quiz.errors import QuizError
from app.quiz.reset import reset_category_progress

router = APIRouter(tags=["progress"])


@router.get("/api/progress/{user_id}", response_model=ProgressResponse)
async def read_progress(
    user_id: int,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> ProgressResponse:
    try:
        async with session_factory.begin() as session:
            dashboard = await get_progress_dashboard(session, user_id=user_id)
    except QuizError as exc:
        raise to_http_exception(exc) from exc

    return ProgressResponse(
        user=UserRecord.model_validate(dashboard.user),
        category_progress=[CategoryProgressRecord.model_validate(item) for item in dashboard.category_progress],
        earned_badges=[BadgeRecord.model_validate(badge) for badge in dashboard.earned_badges],
        all_badges=[BadgeRecord.model_validate(badge) for badge in dashboard.all_badges],
    )


@router.post("/api/reset-progress", response_model=ResetProgressResponse)
async def reset_progress(
    payload: ResetProgressRequest,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> ResetProgressResponse:
    structlog.contextvars.bind_contextvars(user_id=payload.user_id, category_id=payload.category_id)
    try:
        async with session_factory.begin() as session:
            result = await reset_category_progress(
                session,
                user_id=payload.user_id,
                category_id=payload.category_id,
                now_utc=datetime.now(timezone.utc),
            )
    except QuizError as exc:
        raise to_http_exception(exc) from exc

    return ResetProgressResponse(
        message="Progress reset successfully",
        user_id=result.user_id,
        category_id=result.category_id,
        attempts_removed=result.attempts_removed,
        total_points=result.total_points,
    )
