from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.errors import to_http_exception
from app.api.routes.quiz_models import CreateUserRequest, CreateUserResponse, UserRecord, UserResponse
from app.db.session import get_session_factory
from app.quiz.errors import QuizError
from app.quiz.users import ensure_user, get_user

router = APIRouter(tags=["users"])


@router.post("/api/users", response_model=CreateUserResponse)
async def create_or_fetch_user(
    payload: CreateUserRequest,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> JSONResponse:
    try:
        async with session_factory.begin() as session:
            result = await ensure_user(session, raw_name=payload.name, now_utc=datetime.now(timezone.utc))
    except QuizError as exc:
        raise to_http_exception(exc) from exc

    response = CreateUserResponse(
        message="User created successfully" if result.created else "Welcome back!",
        user=UserRecord.model_validate(result.user),
    )
    return JSONResponse(
        status_code=status.HTTP_201_CREATED if result.created else status.HTTP_200_OK,
        content=response.model_dump(mode="json", by_alias=True),
    )


@router.get("/api/users/{user_id}", response_model=UserResponse)
async def read_user(
    user_id: int,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> UserResponse:
    try:
        async with session_factory.begin() as session:
            user = await get_user(session, user_id=user_id)
    except QuizError as exc:
        raise to_http_exception(exc) from exc
    return UserResponse(user=UserRecord.model_validate(user))
