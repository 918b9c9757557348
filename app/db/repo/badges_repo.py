from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.badges import Badge
from app.db.models.user_badges import UserBadge


class BadgesRepo:
    @staticmethod
    async def get_by_id(session: AsyncSession, badge_id: int) -> Badge | None:
        return await session.get(Badge, badge_id)

    @staticmethod
    async def list_all(session: AsyncSession) -> list[Badge]:
        stmt = select(Badge).order_by(Badge.requirement_value.asc(), Badge.id.asc())
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def list_not_earned(session: AsyncSession, *, user_id: int) -> list[Badge]:
        earned = select(UserBadge.badge_id).where(UserBadge.user_id == user_id)
        stmt = select(Badge).where(Badge.id.not_in(earned)).order_by(Badge.id.asc())
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def list_earned(session: AsyncSession, *, user_id: int) -> list[tuple[Badge, datetime]]:
        stmt = (
            select(Badge, UserBadge.earned_at)
            .join(UserBadge, UserBadge.badge_id == Badge.id)
            .where(UserBadge.user_id == user_id)
            .order_by(UserBadge.earned_at.desc(), UserBadge.id.desc())
        )
        result = await session.execute(stmt)
        return [(badge, earned_at) for badge, earned_at in result.all()]

    @staticmethod
    async def create_user_badge(
        session: AsyncSession,
        *,
        user_id: int,
        badge_id: int,
        now_utc: datetime,
    ) -> UserBadge:
        user_badge = UserBadge(user_id=user_id, badge_id=badge_id, earned_at=now_utc)
        session.add(user_badge)
        await session.flush()
        return user_badge
