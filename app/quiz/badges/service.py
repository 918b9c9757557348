from __future__ import annotations

from datetime import datetime

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.badges import Badge
from app.db.repo.badges_repo import BadgesRepo
from app.db.repo.progress_repo import ProgressRepo
from app.db.repo.question_attempts_repo import QuestionAttemptsRepo
from app.db.repo.users_repo import UsersRepo
from app.quiz.badges.rules import is_requirement_met
from app.quiz.badges.types import BadgeProgressState
from app.quiz.errors import UserNotFoundError
from app.quiz.types import BadgeView

logger = structlog.get_logger(__name__)


def badge_view(badge: Badge, *, earned_at: datetime | None = None) -> BadgeView:
    return BadgeView(
        id=badge.id,
        name=badge.name,
        description=badge.description,
        icon=badge.icon,
        category_id=badge.category_id,
        requirement_type=badge.requirement_type,
        requirement_value=badge.requirement_value,
        earned_at=earned_at,
    )


class BadgeService:
    @staticmethod
    async def load_progress_state(session: AsyncSession, *, user_id: int) -> BadgeProgressState:
        user = await UsersRepo.get_by_id(session, user_id)
        if user is None:
            raise UserNotFoundError
        questions_answered = await QuestionAttemptsRepo.count_for_user(session, user_id=user_id)
        progress_rows = await ProgressRepo.list_for_user(session, user_id=user_id)
        return BadgeProgressState(
            total_points=user.total_points,
            current_streak=user.current_streak,
            questions_answered=questions_answered,
            completed_category_ids=frozenset(
                row.category_id for row in progress_rows if row.is_completed
            ),
        )

    @staticmethod
    async def award_eligible_badges(
        session: AsyncSession,
        *,
        user_id: int,
        now_utc: datetime,
    ) -> list[BadgeView]:
        state = await BadgeService.load_progress_state(session, user_id=user_id)
        candidates = await BadgesRepo.list_not_earned(session, user_id=user_id)

        awarded: list[BadgeView] = []
        for badge in candidates:
            if not is_requirement_met(
                requirement_type=badge.requirement_type,
                requirement_value=badge.requirement_value,
                category_id=badge.category_id,
                state=state,
            ):
                continue
            try:
                async with session.begin_nested():
                    await BadgesRepo.create_user_badge(
                        session,
                        user_id=user_id,
                        badge_id=badge.id,
                        now_utc=now_utc,
                    )
            except IntegrityError:
                # Awarded by a concurrent unit between the read and the insert.
                continue
            awarded.append(badge_view(badge, earned_at=now_utc))

        if awarded:
            logger.info(
                "quiz_badges_awarded",
                user_id=user_id,
                badge_ids=[badge.id for badge in awarded],
            )
        return awarded
