from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.user_badges import UserBadge
from app.db.models.users import User


class UsersRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, user_id: int) -> User | None:
        return await session.get(User, user_id)

    @staticmethod
    async def get_by_id_for_update(session: AsyncSession, user_id: int) -> User | None:
        stmt = select(User).where(User.id == user_id).with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_name(session: AsyncSession, name: str) -> User | None:
        stmt = select(User).where(User.name == name)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(session: AsyncSession, *, name: str, now_utc: datetime) -> User:
        user = User(
            name=name,
            total_points=0,
            current_streak=0,
            best_streak=0,
            created_at=now_utc,
            last_active=now_utc,
        )
        session.add(user)
        await session.flush()
        return user

    @staticmethod
    async def list_leaderboard(session: AsyncSession, *, limit: int) -> list[tuple[str, int, int, int]]:
        badge_count = (
            select(func.count(UserBadge.id))
            .where(UserBadge.user_id == User.id)
            .correlate(User)
            .scalar_subquery()
        )
        stmt = (
            select(User.name, User.total_points, User.best_streak, badge_count)
            .where(User.total_points > 0)
            .order_by(User.total_points.desc(), User.best_streak.desc(), User.id.asc())
            .limit(max(1, int(limit)))
        )
        result = await session.execute(stmt)
        return [
            (str(name), int(points), int(best_streak), int(badges or 0))
            for name, points, best_streak, badges in result.all()
        ]
