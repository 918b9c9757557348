from __future__ import annotations

from datetime import datetime

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.users import User
from app.db.repo.users_repo import UsersRepo
from app.quiz.constants import USER_NAME_MAX_LENGTH
from app.quiz.errors import QuizValidationError, UserNotFoundError
from app.quiz.types import EnsureUserResult, UserView

logger = structlog.get_logger(__name__)


def user_view(user: User) -> UserView:
    return UserView(
        id=user.id,
        name=user.name,
        total_points=user.total_points,
        current_streak=user.current_streak,
        best_streak=user.best_streak,
        created_at=user.created_at,
        last_active=user.last_active,
    )


def normalize_user_name(raw_name: str | None) -> str:
    name = (raw_name or "").strip()
    if not name:
        raise QuizValidationError("Name is required")
    if len(name) > USER_NAME_MAX_LENGTH:
        raise QuizValidationError(f"Name must be at most {USER_NAME_MAX_LENGTH} characters")
    return name


async def ensure_user(session: AsyncSession, *, raw_name: str | None, now_utc: datetime) -> EnsureUserResult:
    name = normalize_user_name(raw_name)

    existing = await UsersRepo.get_by_name(session, name)
    if existing is None:
        try:
            async with session.begin_nested():
                created = await UsersRepo.create(session, name=name, now_utc=now_utc)
        except IntegrityError:
            existing = await UsersRepo.get_by_name(session, name)
            if existing is None:
                raise
        else:
            logger.info("quiz_user_created", user_id=created.id)
            return EnsureUserResult(user=user_view(created), created=True)

    existing.last_active = now_utc
    await session.flush()
    return EnsureUserResult(user=user_view(existing), created=False)


async def get_user(session: AsyncSession, *, user_id: int) -> UserView:
    user = await UsersRepo.get_by_id(session, user_id)
    if user is None:
        raise UserNotFoundError
    return user_view(user)
