from __future__ import annotations

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.user_question_type_performance import UserQuestionTypePerformance
from app.db.repo.performance_repo import PerformanceRepo
from app.quiz.performance.rules import order_by_weakness, record_attempt, remove_attempts
from app.quiz.performance.types import EMPTY_PERFORMANCE, PerformanceSnapshot, TypeStat


class PerformanceService:
    @staticmethod
    def _snapshot_from_model(row: UserQuestionTypePerformance) -> PerformanceSnapshot:
        return PerformanceSnapshot(
            total_attempts=row.total_attempts,
            correct_attempts=row.correct_attempts,
            success_rate=float(row.success_rate),
            avg_time_taken=float(row.avg_time_taken),
        )

    @staticmethod
    def _apply_snapshot_to_model(
        row: UserQuestionTypePerformance,
        snapshot: PerformanceSnapshot,
        now_utc: datetime,
    ) -> None:
        row.total_attempts = snapshot.total_attempts
        row.correct_attempts = snapshot.correct_attempts
        row.success_rate = snapshot.success_rate
        row.avg_time_taken = snapshot.avg_time_taken
        row.updated_at = now_utc

    @staticmethod
    async def load_type_stats(session: AsyncSession, *, user_id: int) -> list[TypeStat]:
        rows = await PerformanceRepo.list_type_stats(session, user_id=user_id)
        return order_by_weakness(
            TypeStat(
                question_type_id=type_id,
                type_name=type_name,
                difficulty_level=difficulty,
                success_rate=rate,
                total_attempts=attempts,
            )
            for type_id, type_name, difficulty, rate, attempts in rows
        )

    @staticmethod
    async def record_attempt(
        session: AsyncSession,
        *,
        user_id: int,
        question_type_id: int,
        is_correct: bool,
        time_taken: int,
        now_utc: datetime,
    ) -> PerformanceSnapshot:
        row = await PerformanceRepo.get_for_update(
            session,
            user_id=user_id,
            question_type_id=question_type_id,
        )
        previous = EMPTY_PERFORMANCE if row is None else PerformanceService._snapshot_from_model(row)
        snapshot = record_attempt(previous, is_correct=is_correct, time_taken=time_taken)

        if row is None:
            await PerformanceRepo.create(
                session,
                user_id=user_id,
                question_type_id=question_type_id,
                total_attempts=snapshot.total_attempts,
                correct_attempts=snapshot.correct_attempts,
                success_rate=snapshot.success_rate,
                avg_time_taken=snapshot.avg_time_taken,
                now_utc=now_utc,
            )
            return snapshot

        PerformanceService._apply_snapshot_to_model(row, snapshot, now_utc)
        row.last_attempted = now_utc
        await session.flush()
        return snapshot

    @staticmethod
    async def remove_attempts(
        session: AsyncSession,
        *,
        user_id: int,
        question_type_id: int,
        attempts: int,
        correct: int,
        time_taken_total: int,
        now_utc: datetime,
    ) -> PerformanceSnapshot | None:
        row = await PerformanceRepo.get_for_update(
            session,
            user_id=user_id,
            question_type_id=question_type_id,
        )
        if row is None:
            return None

        snapshot = remove_attempts(
            PerformanceService._snapshot_from_model(row),
            attempts=attempts,
            correct=correct,
            time_taken_total=time_taken_total,
        )
        PerformanceService._apply_snapshot_to_model(row, snapshot, now_utc)
        await session.flush()
        return snapshot
