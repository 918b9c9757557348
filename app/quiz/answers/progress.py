from __future__ import annotations

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.question_attempts import QuestionAttempt
from app.db.models.users import User
from app.db.repo.categories_repo import CategoriesRepo
from app.db.repo.progress_repo import ProgressRepo
from app.db.repo.question_attempts_repo import QuestionAttemptsRepo
from app.db.repo.users_repo import UsersRepo
from app.quiz.answers.types import AnswerEvaluation, AppliedResult, ProgressSnapshot
from app.quiz.errors import CategoryNotFoundError, UserNotFoundError
from app.quiz.performance.service import PerformanceService
from app.quiz.streak.rules import apply_answer, is_completed
from app.quiz.streak.types import ScoreSnapshot


class ProgressService:
    @staticmethod
    def _apply_score(user: User, *, is_correct: bool, points_earned: int) -> ScoreSnapshot:
        snapshot = apply_answer(
            ScoreSnapshot(
                total_points=user.total_points,
                current_streak=user.current_streak,
                best_streak=user.best_streak,
            ),
            is_correct=is_correct,
            points_earned=points_earned,
        )
        user.total_points = snapshot.total_points
        user.current_streak = snapshot.current_streak
        user.best_streak = snapshot.best_streak
        return snapshot

    @staticmethod
    async def _upsert_progress(
        session: AsyncSession,
        *,
        user_id: int,
        evaluation: AnswerEvaluation,
        now_utc: datetime,
    ) -> ProgressSnapshot:
        category = await CategoriesRepo.get_by_id(session, evaluation.category_id)
        if category is None:
            raise CategoryNotFoundError

        correct_delta = 1 if evaluation.is_correct else 0
        progress = await ProgressRepo.get_for_update(
            session,
            user_id=user_id,
            category_id=evaluation.category_id,
        )
        if progress is None:
            progress = await ProgressRepo.create(
                session,
                user_id=user_id,
                category_id=evaluation.category_id,
                questions_answered=1,
                correct_answers=correct_delta,
                points_earned=evaluation.points_earned,
                is_completed=is_completed(
                    questions_answered=1,
                    total_questions=category.total_questions,
                    already_completed=False,
                ),
                last_question_id=evaluation.question_id,
                now_utc=now_utc,
            )
        else:
            progress.questions_answered += 1
            progress.correct_answers += correct_delta
            progress.points_earned += evaluation.points_earned
            progress.is_completed = is_completed(
                questions_answered=progress.questions_answered,
                total_questions=category.total_questions,
                already_completed=progress.is_completed,
            )
            progress.last_question_id = evaluation.question_id
            progress.updated_at = now_utc
            await session.flush()

        return ProgressSnapshot(
            category_id=progress.category_id,
            questions_answered=progress.questions_answered,
            correct_answers=progress.correct_answers,
            points_earned=progress.points_earned,
            is_completed=progress.is_completed,
        )

    @staticmethod
    async def apply_result(
        session: AsyncSession,
        *,
        user_id: int,
        evaluation: AnswerEvaluation,
        time_taken: int,
        hint_used: bool,
        now_utc: datetime,
    ) -> AppliedResult:
        """Logs the attempt and moves every derived aggregate; callers own the transaction."""
        user = await UsersRepo.get_by_id_for_update(session, user_id)
        if user is None:
            raise UserNotFoundError

        attempt = await QuestionAttemptsRepo.create(
            session,
            attempt=QuestionAttempt(
                user_id=user_id,
                question_id=evaluation.question_id,
                question_type_id=evaluation.question_type_id,
                selected_answer_id=evaluation.selected_option_id,
                is_correct=evaluation.is_correct,
                time_taken=time_taken,
                hint_used=hint_used,
                attempted_at=now_utc,
            ),
        )

        score = ProgressService._apply_score(
            user,
            is_correct=evaluation.is_correct,
            points_earned=evaluation.points_earned,
        )
        user.last_active = now_utc
        await session.flush()

        progress = await ProgressService._upsert_progress(
            session,
            user_id=user_id,
            evaluation=evaluation,
            now_utc=now_utc,
        )
        performance = await PerformanceService.record_attempt(
            session,
            user_id=user_id,
            question_type_id=evaluation.question_type_id,
            is_correct=evaluation.is_correct,
            time_taken=time_taken,
            now_utc=now_utc,
        )
        return AppliedResult(
            attempt_id=attempt.id,
            score=score,
            progress=progress,
            performance=performance,
        )
