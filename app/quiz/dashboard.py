from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repo.badges_repo import BadgesRepo
from app.db.repo.categories_repo import CategoriesRepo
from app.db.repo.users_repo import UsersRepo
from app.quiz.badges.service import badge_view
from app.quiz.errors import UserNotFoundError
from app.quiz.types import CategoryProgressView, LeaderboardEntry, ProgressDashboard
from app.quiz.users import user_view


async def list_categories_with_progress(
    session: AsyncSession,
    *,
    user_id: int,
) -> list[CategoryProgressView]:
    rows = await CategoriesRepo.list_with_progress(session, user_id=user_id)
    return [
        CategoryProgressView(
            id=category.id,
            name=category.name,
            icon=category.icon,
            description=category.description,
            total_questions=category.total_questions,
            questions_answered=answered,
            correct_answers=correct,
            points_earned=points,
            is_completed=completed,
        )
        for category, answered, correct, points, completed in rows
    ]


async def get_progress_dashboard(session: AsyncSession, *, user_id: int) -> ProgressDashboard:
    user = await UsersRepo.get_by_id(session, user_id)
    if user is None:
        raise UserNotFoundError

    category_progress = await list_categories_with_progress(session, user_id=user_id)
    earned = await BadgesRepo.list_earned(session, user_id=user_id)
    all_badges = await BadgesRepo.list_all(session)
    return ProgressDashboard(
        user=user_view(user),
        category_progress=tuple(category_progress),
        earned_badges=tuple(badge_view(badge, earned_at=earned_at) for badge, earned_at in earned),
        all_badges=tuple(badge_view(badge) for badge in all_badges),
    )


async def get_leaderboard(session: AsyncSession, *, limit: int) -> list[LeaderboardEntry]:
    rows = await UsersRepo.list_leaderboard(session, limit=limit)
    return [
        LeaderboardEntry(name=name, total_points=points, best_streak=best_streak, badge_count=badges)
        for name, points, best_streak, badges in rows
    ]
