from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.routes.quiz_models import LeaderboardRecord, LeaderboardResponse
from app.core.config import get_settings
from app.db.session import get_session_factory
from app.quiz.dashboard import get_leaderboard

router = APIRouter(tags=["leaderboard"])


@router.get("/api/leaderboard", response_model=LeaderboardResponse)
async def read_leaderboard(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> LeaderboardResponse:
    async with session_factory.begin() as session:
        entries = await get_leaderboard(session, limit=get_settings().leaderboard_limit)
    return LeaderboardResponse(leaderboard=[LeaderboardRecord.model_validate(entry) for entry in entries])
